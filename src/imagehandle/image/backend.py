"""
Pixel backend

ImageHandle never touches pixels itself. It goes through three small
capabilities, implemented here on top of Pillow:

- Decoder: file -> bitmap
- Encoder: bitmap -> file
- Transformer: blank/copy/resample/mirror/rotate
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Protocol, Tuple

from PIL import Image

from ..config import Settings
from .formats import ImageFormat

logger = logging.getLogger(__name__)


class Mirror(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Decoder(Protocol):
    def decode(self, path: Path, image_format: ImageFormat) -> Image.Image:
        ...


class Encoder(Protocol):
    def encode(self, bitmap: Image.Image, path: Path, image_format: ImageFormat) -> None:
        ...


class Transformer(Protocol):
    def blank(self, size: Tuple[int, int]) -> Image.Image:
        ...

    def copy(self, bitmap: Image.Image) -> Image.Image:
        ...

    def resample(self, bitmap: Image.Image, size: Tuple[int, int]) -> Image.Image:
        ...

    def mirror(self, bitmap: Image.Image, axis: Mirror) -> Image.Image:
        ...

    def rotate_clockwise(self, bitmap: Image.Image, degrees: int) -> Image.Image:
        ...


class Backend(Decoder, Encoder, Transformer, Protocol):
    """Everything an ImageHandle needs from a pixel library"""


# Modes each encoder can write as-is. Anything else is converted first.
_ENCODER_MODES = {
    ImageFormat.JPEG: ("RGB", "L", "CMYK"),
    ImageFormat.BMP: ("1", "L", "P", "RGB"),
}

_MIRRORS = {
    Mirror.HORIZONTAL: Image.Transpose.FLIP_LEFT_RIGHT,
    Mirror.VERTICAL: Image.Transpose.FLIP_TOP_BOTTOM,
}

# Pillow's ROTATE_* transposes turn counter-clockwise.
_CLOCKWISE_ROTATIONS = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


class PillowBackend:
    """Decoder, Encoder and Transformer backed by Pillow"""

    def __init__(self, settings: Settings):
        self.settings = settings

    def decode(self, path: Path, image_format: ImageFormat) -> Image.Image:
        """
        Fully decode a file, restricted to the already detected format.

        The returned bitmap is detached from the file, so no handle stays open.
        """
        with Image.open(path, formats=[image_format.pillow_format]) as img:
            img.load()
            bitmap = img.copy()
        logger.debug(f"Decoded {path} as {image_format.value} ({bitmap.mode} {bitmap.width}x{bitmap.height})")
        return bitmap

    def encode(self, bitmap: Image.Image, path: Path, image_format: ImageFormat) -> None:
        """Write bitmap to path with the encoder for image_format"""
        allowed = _ENCODER_MODES.get(image_format)
        if allowed is not None and bitmap.mode not in allowed:
            bitmap = bitmap.convert("RGB")

        options = {}
        if image_format is ImageFormat.JPEG:
            options["quality"] = self.settings.jpeg_quality
        elif image_format is ImageFormat.WEBP:
            options["quality"] = self.settings.webp_quality

        bitmap.save(path, format=image_format.pillow_format, **options)

    def blank(self, size: Tuple[int, int]) -> Image.Image:
        return Image.new("RGB", size)

    def copy(self, bitmap: Image.Image) -> Image.Image:
        return bitmap.copy()

    def resample(self, bitmap: Image.Image, size: Tuple[int, int]) -> Image.Image:
        """
        Smooth resize to size.

        Pillow silently falls back to nearest-neighbour for palette and
        bilevel images, so those are promoted to true color first.
        """
        if bitmap.mode in ("1", "P"):
            has_alpha = bitmap.mode == "P" and "transparency" in bitmap.info
            bitmap = bitmap.convert("RGBA" if has_alpha else "RGB")
        return bitmap.resize(size, self.settings.resample_filter)

    def mirror(self, bitmap: Image.Image, axis: Mirror) -> Image.Image:
        return bitmap.transpose(_MIRRORS[axis])

    def rotate_clockwise(self, bitmap: Image.Image, degrees: int) -> Image.Image:
        try:
            method = _CLOCKWISE_ROTATIONS[degrees % 360]
        except KeyError:
            raise ValueError(f"Rotation must be a multiple of 90 degrees, got {degrees}") from None
        return bitmap.transpose(method)
