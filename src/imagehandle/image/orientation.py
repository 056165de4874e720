"""
EXIF orientation correction

Each EXIF Orientation value maps to the steps that bring the stored pixels
upright. Steps run in order on a bitmap the caller owns.

References:
    https://exiftool.org/TagNames/EXIF.html
    http://sylvana.net/jpegcrop/exif_orientation.html
"""

from typing import Dict, Optional, Tuple, Union

from PIL import Image

from .backend import Mirror, Transformer

Step = Union[Mirror, int]  # an int is a clockwise rotation in degrees

ORIENTATION_STEPS: Dict[int, Tuple[Step, ...]] = {
    2: (Mirror.HORIZONTAL,),
    3: (180,),
    4: (Mirror.VERTICAL,),
    5: (Mirror.HORIZONTAL, 270),
    6: (90,),
    7: (Mirror.HORIZONTAL, 90),
    8: (270,),
}

# Orientations whose correction swaps width and height
TRANSPOSING_ORIENTATIONS = frozenset({5, 6, 7, 8})


def swaps_dimensions(orientation: Optional[int]) -> bool:
    return orientation in TRANSPOSING_ORIENTATIONS


def apply_orientation(
    bitmap: Image.Image,
    orientation: Optional[int],
    transformer: Transformer
) -> Image.Image:
    """
    Apply the correction for an EXIF Orientation value.

    Args:
        bitmap: Bitmap to correct; may be returned unchanged
        orientation: EXIF Orientation value (None, 1 or unknown = no-op)
        transformer: Backend that performs mirror/rotate

    Returns:
        Corrected bitmap
    """
    for step in ORIENTATION_STEPS.get(orientation, ()):
        if isinstance(step, Mirror):
            bitmap = transformer.mirror(bitmap, step)
        else:
            bitmap = transformer.rotate_clockwise(bitmap, step)
    return bitmap
