"""
WBMP (Wireless Bitmap) support for Pillow

Pillow has no WBMP codec, so this module registers one as a regular image
plugin. Only type 0 (uncompressed bilevel, no extension headers) exists in
practice:

    0x00                type
    0x00                fix header
    uintvar             width
    uintvar             height
    rows                1 bit per pixel, MSB first, padded to a byte, 1 = white

uintvar is the WAP multi-byte integer: 7 bits per byte, high bit set on every
byte except the last.
"""

from typing import BinaryIO, Tuple

from PIL import Image, ImageFile

FORMAT = "WBMP"
MIME_TYPE = "image/vnd.wap.wbmp"

_MAX_UINTVAR_BYTES = 5


def decode_uintvar(data: bytes, pos: int = 0) -> Tuple[int, int]:
    """
    Decode a multi-byte integer.

    Args:
        data: Buffer holding the integer
        pos: Offset of the first byte

    Returns:
        (value, offset just past the integer)

    Raises:
        ValueError: If the integer is truncated or too long
    """
    value = 0
    for i in range(_MAX_UINTVAR_BYTES):
        if pos + i >= len(data):
            raise ValueError("Truncated WBMP integer")
        byte = data[pos + i]
        value = (value << 7) | (byte & 0x7F)
        if not byte & 0x80:
            return value, pos + i + 1
    raise ValueError("WBMP integer too long")


def encode_uintvar(value: int) -> bytes:
    """Encode a non-negative integer as a multi-byte integer."""
    if value < 0:
        raise ValueError(f"Cannot encode negative value {value}")
    out = [value & 0x7F]
    value >>= 7
    while value:
        out.append(0x80 | (value & 0x7F))
        value >>= 7
    return bytes(reversed(out))


def _read_uintvar(fp: BinaryIO) -> int:
    value = 0
    for _ in range(_MAX_UINTVAR_BYTES):
        byte = fp.read(1)
        if not byte:
            raise SyntaxError("Truncated WBMP header")
        value = (value << 7) | (byte[0] & 0x7F)
        if not byte[0] & 0x80:
            return value
    raise SyntaxError("WBMP header integer too long")


def _accept(prefix: bytes) -> bool:
    # No magic number: require type 0, fix header 0 and a non-empty size.
    # ICO/CUR headers (00 00 01 00 / 00 00 02 00) decode to a zero height.
    if len(prefix) < 4 or prefix[0] != 0 or prefix[1] != 0:
        return False
    try:
        width, pos = decode_uintvar(prefix, 2)
        height, _ = decode_uintvar(prefix, pos)
    except ValueError:
        return False
    return width > 0 and height > 0


class WbmpImageFile(ImageFile.ImageFile):
    format = FORMAT
    format_description = "Wireless Bitmap"

    def _open(self):
        if self.fp.read(2) != b"\x00\x00":
            raise SyntaxError("Not a type 0 WBMP file")

        width = _read_uintvar(self.fp)
        height = _read_uintvar(self.fp)
        if width < 1 or height < 1:
            raise SyntaxError("Invalid WBMP size")

        self._mode = "1"
        self._size = (width, height)
        self.tile = [("raw", (0, 0, width, height), self.fp.tell(), ("1", 0, 1))]


def _save(im: Image.Image, fp: BinaryIO, filename) -> None:
    if im.mode != "1":
        im = im.convert("1")

    fp.write(b"\x00\x00" + encode_uintvar(im.width) + encode_uintvar(im.height))
    ImageFile._save(im, fp, [("raw", (0, 0) + im.size, 0, ("1", 0, 1))])


Image.register_open(FORMAT, WbmpImageFile, _accept)
Image.register_save(FORMAT, _save)
Image.register_extension(FORMAT, ".wbmp")
Image.register_mime(FORMAT, MIME_TYPE)
