"""Data models for imagehandle"""

from .thumbnail_result import ThumbnailResult

__all__ = ["ThumbnailResult"]
