"""
imagehandle - Thumbnail, orient, save and serve raster images

This library provides:
- ImageHandle: one decoded image plus its file bookkeeping
- Thumbnails bounded by a maximum side, aspect ratio preserved
- EXIF orientation correction re-read from the source file
- BMP, GIF, JPEG, PNG, WBMP and WEBP decode/encode (detected by content)
- Streaming an image as a Content-Type/Content-Length response

Example:
    >>> from imagehandle import ImageHandle
    >>>
    >>> with ImageHandle.load("photo.jpg") as photo:
    ...     with photo.apply_exif_orientation() as upright, upright.thumbnail(400) as thumb:
    ...         thumb.save("thumbs/photo.jpg")
"""

from .version import __version__

# Configuration
from .config import Settings, get_settings

# Errors
from .errors import (
    AllocationError,
    ImageError,
    ImageIOError,
    NotFoundError,
    PreconditionError,
    UnsupportedFormatError,
)

# Image handle
from .image import (
    BufferedChannel,
    FormatDetector,
    ImageFormat,
    ImageHandle,
    PillowBackend,
    StreamChannel,
)

# Metadata
from .metadata import ExifReader

# Models
from .models import ThumbnailResult

# Validation
from .validation import SourceValidator

# High-level API
from .api import batch_thumbnails, make_thumbnail

__all__ = [
    # Version
    "__version__",
    # Configuration
    "Settings",
    "get_settings",
    # Errors
    "ImageError",
    "NotFoundError",
    "UnsupportedFormatError",
    "AllocationError",
    "PreconditionError",
    "ImageIOError",
    # Image
    "ImageHandle",
    "ImageFormat",
    "FormatDetector",
    "PillowBackend",
    "StreamChannel",
    "BufferedChannel",
    # Metadata
    "ExifReader",
    # Models
    "ThumbnailResult",
    # Validation
    "SourceValidator",
    # High-level API
    "make_thumbnail",
    "batch_thumbnails",
]
