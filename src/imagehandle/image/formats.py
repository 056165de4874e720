"""
Image Format Detection

Formats are detected from file content through a Pillow header probe,
never from the file extension.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from ..errors import UnsupportedFormatError
from . import wbmp

UNKNOWN_MIME_TYPE = "application/octet-stream"


class ImageFormat(Enum):
    """Supported image formats"""
    BMP = "BMP"
    GIF = "GIF"
    JPEG = "JPEG"
    PNG = "PNG"
    WBMP = "WBMP"
    WEBP = "WEBP"

    @property
    def pillow_format(self) -> str:
        """Format name understood by PIL.Image.open/save"""
        return self.value

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @classmethod
    def from_name(cls, name: str) -> "ImageFormat":
        """
        Look up a format by name, case-insensitively ("jpg" is accepted).

        Raises:
            UnsupportedFormatError: If the name is not a supported format
        """
        key = name.strip().upper()
        if key == "JPG":
            key = "JPEG"
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedFormatError(
                f'Format "{name}" is not supported.',
                mime_type=FormatDetector.mime_type_for(key)
            ) from None


_MIME_TYPES = {
    ImageFormat.BMP: "image/bmp",
    ImageFormat.GIF: "image/gif",
    ImageFormat.JPEG: "image/jpeg",
    ImageFormat.PNG: "image/png",
    ImageFormat.WBMP: wbmp.MIME_TYPE,
    ImageFormat.WEBP: "image/webp",
}

_EXTENSIONS = {
    ImageFormat.BMP: ".bmp",
    ImageFormat.GIF: ".gif",
    ImageFormat.JPEG: ".jpg",
    ImageFormat.PNG: ".png",
    ImageFormat.WBMP: ".wbmp",
    ImageFormat.WEBP: ".webp",
}

# Pillow format name -> decoder format. MPO is how Pillow reports camera
# JPEGs that carry a multi-picture index.
_DETECTED_FORMATS = {
    "BMP": ImageFormat.BMP,
    "GIF": ImageFormat.GIF,
    "JPEG": ImageFormat.JPEG,
    "MPO": ImageFormat.JPEG,
    "PNG": ImageFormat.PNG,
    "WBMP": ImageFormat.WBMP,
    "WEBP": ImageFormat.WEBP,
}


class FormatDetector:
    """Detect image formats from file headers"""

    @staticmethod
    def mime_type_for(pillow_format: Optional[str]) -> str:
        """
        MIME type for any Pillow format name.

        Args:
            pillow_format: Format name as reported by Pillow

        Returns:
            Registered MIME type, or application/octet-stream
        """
        if not pillow_format:
            return UNKNOWN_MIME_TYPE
        detected = _DETECTED_FORMATS.get(pillow_format.upper())
        if detected is not None:
            return detected.mime_type
        Image.init()
        return Image.MIME.get(pillow_format.upper(), UNKNOWN_MIME_TYPE)

    @staticmethod
    def from_pillow_format(pillow_format: Optional[str]) -> Optional[ImageFormat]:
        """Map a Pillow format name to ImageFormat, or None if unsupported"""
        if not pillow_format:
            return None
        return _DETECTED_FORMATS.get(pillow_format.upper())

    @staticmethod
    def probe(file_path: Path) -> Tuple[int, int, ImageFormat]:
        """
        Read dimensions and format from the file header.

        Pillow opens lazily, so no pixel data is decoded here.

        Args:
            file_path: Path to image file

        Returns:
            (width, height, format) tuple

        Raises:
            UnsupportedFormatError: If the content is not a supported format
            OSError: If a format plugin rejects a malformed header
        """
        try:
            with Image.open(file_path) as img:
                width, height = img.size
                pillow_format = img.format
        except UnidentifiedImageError:
            raise UnsupportedFormatError(
                f'Type "{UNKNOWN_MIME_TYPE}" is not supported.',
                mime_type=UNKNOWN_MIME_TYPE
            ) from None

        image_format = FormatDetector.from_pillow_format(pillow_format)
        if image_format is None:
            mime_type = FormatDetector.mime_type_for(pillow_format)
            raise UnsupportedFormatError(
                f'Type "{mime_type}" is not supported.',
                mime_type=mime_type
            )

        return width, height, image_format

    @staticmethod
    def detect_format(file_path: Path) -> Optional[ImageFormat]:
        """
        Detect format from file content.

        Args:
            file_path: Path to image file

        Returns:
            ImageFormat enum or None if unsupported or unreadable
        """
        try:
            _, _, image_format = FormatDetector.probe(file_path)
        except (UnsupportedFormatError, OSError):
            return None
        return image_format
