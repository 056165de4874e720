"""
Tests for format detection

Tests:
- ImageFormat metadata (MIME types, extensions, names)
- Header probing independent of file extension
"""

import pytest

from imagehandle import FormatDetector, ImageFormat, UnsupportedFormatError


class TestImageFormat:
    """Test the closed format enum"""

    @pytest.mark.parametrize("image_format,mime_type", [
        (ImageFormat.BMP, "image/bmp"),
        (ImageFormat.GIF, "image/gif"),
        (ImageFormat.JPEG, "image/jpeg"),
        (ImageFormat.PNG, "image/png"),
        (ImageFormat.WBMP, "image/vnd.wap.wbmp"),
        (ImageFormat.WEBP, "image/webp"),
    ])
    def test_mime_types(self, image_format, mime_type):
        assert image_format.mime_type == mime_type

    def test_exactly_six_formats(self):
        assert {f.value for f in ImageFormat} == {"BMP", "GIF", "JPEG", "PNG", "WBMP", "WEBP"}

    @pytest.mark.parametrize("name,expected", [
        ("png", ImageFormat.PNG),
        ("JPEG", ImageFormat.JPEG),
        ("jpg", ImageFormat.JPEG),
        (" webp ", ImageFormat.WEBP),
    ])
    def test_from_name(self, name, expected):
        assert ImageFormat.from_name(name) is expected

    def test_from_name_unsupported(self):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            ImageFormat.from_name("tiff")
        assert exc_info.value.mime_type == "image/tiff"

    def test_extensions(self):
        assert ImageFormat.JPEG.extension == ".jpg"
        assert ImageFormat.WBMP.extension == ".wbmp"


class TestFormatDetector:
    """Test header probing"""

    def test_probe_returns_size_and_format(self, images_dir):
        assert FormatDetector.probe(images_dir / "jpeg_basic.jpg") == (800, 600, ImageFormat.JPEG)

    def test_probe_ignores_extension(self, images_dir):
        width, height, image_format = FormatDetector.probe(images_dir / "png_named_jpg.jpg")
        assert image_format is ImageFormat.PNG
        assert (width, height) == (30, 20)

    def test_probe_wbmp(self, images_dir):
        assert FormatDetector.probe(images_dir / "wbmp_basic.wbmp") == (40, 30, ImageFormat.WBMP)

    def test_probe_unsupported(self, images_dir):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            FormatDetector.probe(images_dir / "tiff_basic.tif")
        assert 'Type "image/tiff" is not supported.' == str(exc_info.value)

    def test_detect_format(self, images_dir):
        assert FormatDetector.detect_format(images_dir / "gif_basic.gif") is ImageFormat.GIF
        assert FormatDetector.detect_format(images_dir / "not_an_image.txt") is None
        assert FormatDetector.detect_format(images_dir / "tiff_basic.tif") is None

    def test_mpo_is_jpeg(self):
        """Camera multi-picture JPEGs decode as JPEG"""
        assert FormatDetector.from_pillow_format("MPO") is ImageFormat.JPEG
        assert FormatDetector.mime_type_for("MPO") == "image/jpeg"

    def test_mime_type_for_unknown(self):
        assert FormatDetector.mime_type_for(None) == "application/octet-stream"
        assert FormatDetector.mime_type_for("NOPE") == "application/octet-stream"
