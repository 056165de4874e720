"""Metadata extraction module"""

from .exif_reader import ORIENTATION_TAG, ExifReader

__all__ = ["ExifReader", "ORIENTATION_TAG"]
