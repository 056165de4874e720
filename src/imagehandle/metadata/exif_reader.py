"""
EXIF Orientation Reader

Reads the Orientation tag straight from an image file, independently of
any decoded bitmap.
"""

import logging
from pathlib import Path
from typing import Optional

from PIL import Image

logger = logging.getLogger(__name__)

ORIENTATION_TAG = 0x0112


class ExifReader:
    """Reads orientation metadata from image files"""

    @staticmethod
    def read_orientation(image_path: Path) -> Optional[int]:
        """
        Read the EXIF Orientation value.

        A missing EXIF block is normal and returns None silently. A file or
        value that cannot be read also returns None, but is logged.

        Args:
            image_path: Path to image file

        Returns:
            Orientation value, or None if absent or unreadable
        """
        try:
            with Image.open(image_path) as img:
                exif = img.getexif()
        except (OSError, SyntaxError, ValueError) as e:
            logger.warning(f"Could not read EXIF from {image_path}: {e}")
            return None

        if not exif:
            return None

        value = exif.get(ORIENTATION_TAG)
        if value is None:
            return None

        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring invalid EXIF orientation {value!r} in {image_path}")
            return None
