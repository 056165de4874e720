"""
Exception hierarchy

Every error raised by imagehandle derives from ImageError and from the
builtin exception a caller would otherwise expect for the same condition.
"""

from typing import Optional


class ImageError(Exception):
    """Base class for all imagehandle errors"""


class NotFoundError(ImageError, FileNotFoundError):
    """Source file is missing, not a regular file, or not readable"""


class UnsupportedFormatError(ImageError, ValueError):
    """
    Detected or requested format is not one of the supported formats.

    Attributes:
        mime_type: MIME type of the offending format, if known
    """

    def __init__(self, message: str, mime_type: Optional[str] = None):
        super().__init__(message)
        self.mime_type = mime_type


class AllocationError(ImageError, MemoryError):
    """Bitmap could not be allocated or decoded"""


class PreconditionError(ImageError):
    """Operation called on a handle that lacks the state it needs"""


class ImageIOError(ImageError, OSError):
    """Encoding or writing an image failed"""
