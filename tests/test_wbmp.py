"""
Tests for the WBMP Pillow plugin
"""

import pytest
from PIL import Image

from imagehandle.image import wbmp


class TestUintvar:
    """Test the WAP multi-byte integer"""

    @pytest.mark.parametrize("value,encoded", [
        (0, b"\x00"),
        (5, b"\x05"),
        (127, b"\x7f"),
        (128, b"\x81\x00"),
        (300, b"\x82\x2c"),
        (16384, b"\x81\x80\x00"),
    ])
    def test_encode(self, value, encoded):
        assert wbmp.encode_uintvar(value) == encoded

    @pytest.mark.parametrize("value", [0, 1, 127, 128, 300, 16384, 65535])
    def test_decode_after_offset(self, value):
        """Should decode at an offset and report where the integer ends"""
        data = b"\xaa\xbb" + wbmp.encode_uintvar(value) + b"\xcc"
        decoded, pos = wbmp.decode_uintvar(data, 2)
        assert decoded == value
        assert data[pos:] == b"\xcc"

    def test_decode_truncated(self):
        with pytest.raises(ValueError):
            wbmp.decode_uintvar(b"\x81")

    def test_encode_negative(self):
        with pytest.raises(ValueError):
            wbmp.encode_uintvar(-1)


class TestAccept:
    """Test header sniffing"""

    def test_accepts_wbmp_header(self):
        assert wbmp._accept(b"\x00\x00\x0a\x05" + b"\x00" * 12)

    @pytest.mark.parametrize("prefix", [
        b"\x00\x00\x01\x00\x01\x00",  # ICO
        b"\x00\x00\x02\x00\x01\x00",  # CUR
        b"\x89PNG\r\n\x1a\n",
        b"BM\x00\x00",
        b"\x00\x01\x0a\x05",
        b"\x00\x00",
    ])
    def test_rejects_other_headers(self, prefix):
        assert not wbmp._accept(prefix)


class TestCodec:
    """Test reading and writing WBMP files through Pillow"""

    def test_header_and_size(self, tmp_path):
        """10x5 image: 4 header bytes and 5 rows of 2 bytes"""
        path = tmp_path / "small.wbmp"
        Image.new("1", (10, 5)).save(path, format="WBMP")

        data = path.read_bytes()
        assert data[:4] == b"\x00\x00\x0a\x05"
        assert len(data) == 4 + 5 * 2

    def test_white_is_one(self, tmp_path):
        """White pixels are stored as set bits"""
        path = tmp_path / "white.wbmp"
        Image.new("1", (8, 1), 1).save(path, format="WBMP")
        assert path.read_bytes() == b"\x00\x00\x08\x01\xff"

    def test_round_trip_pixels(self, tmp_path):
        """A checkerboard survives save and open"""
        img = Image.new("1", (13, 7))
        for y in range(7):
            for x in range(13):
                img.putpixel((x, y), (x + y) % 2)

        path = tmp_path / "checker.wbmp"
        img.save(path, format="WBMP")

        with Image.open(path) as reopened:
            assert reopened.format == "WBMP"
            assert reopened.mode == "1"
            assert reopened.size == (13, 7)
            assert reopened.tobytes() == img.tobytes()

    def test_save_converts_to_bilevel(self, tmp_path):
        """Color images are converted before writing"""
        path = tmp_path / "color.wbmp"
        Image.new("RGB", (4, 4), (255, 255, 255)).save(path, format="WBMP")

        with Image.open(path) as reopened:
            assert reopened.mode == "1"
            assert reopened.getpixel((0, 0)) == 255

    def test_registered_mime_type(self):
        assert Image.MIME["WBMP"] == "image/vnd.wap.wbmp"
