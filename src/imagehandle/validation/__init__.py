"""Source validation module"""

from .source_validator import SourceValidator

__all__ = ["SourceValidator"]
