"""
Shared fixtures

Test images are synthesised with Pillow once per session.
"""

from pathlib import Path
from typing import Optional

import pytest
from PIL import Image, ImageDraw

from imagehandle import Settings


def create_basic_image(width: int, height: int, color: tuple, mode: str = "RGB") -> Image.Image:
    """Create a simple colored image with a marker in the top-left corner"""
    img = Image.new(mode, (width, height), color)
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, max(width // 4, 1), max(height // 4, 1)), fill="white")
    return img


def create_exif(orientation: Optional[int] = None, camera_make: Optional[str] = None) -> bytes:
    """Raw EXIF block with the given Orientation/Make tags"""
    exif = Image.Exif()
    if orientation is not None:
        exif[0x0112] = orientation
    if camera_make is not None:
        exif[0x010F] = camera_make
    return exif.tobytes()


@pytest.fixture(scope="session")
def images_dir(tmp_path_factory) -> Path:
    """Directory with one image per scenario"""
    fixture_dir = tmp_path_factory.mktemp("images")

    # JPEG with EXIF but no orientation
    img = create_basic_image(800, 600, (70, 130, 180))
    img.save(fixture_dir / "jpeg_basic.jpg", quality=85, exif=create_exif(camera_make="Nikon"))

    # JPEG without any EXIF
    img = create_basic_image(800, 600, (180, 130, 70))
    img.save(fixture_dir / "jpeg_no_exif.jpg", quality=85)

    # Portrait JPEGs, one per orientation value
    for orientation in range(1, 9):
        img = create_basic_image(600, 800, (180, 100, 180))
        img.save(
            fixture_dir / f"jpeg_orientation_{orientation}.jpg",
            quality=85,
            exif=create_exif(orientation=orientation)
        )

    create_basic_image(800, 600, (150, 150, 150)).save(fixture_dir / "png_basic.png")
    create_basic_image(64, 48, (0, 0, 0, 0), mode="RGBA").save(fixture_dir / "png_rgba.png")
    create_basic_image(120, 90, (200, 50, 50)).save(fixture_dir / "gif_basic.gif")
    create_basic_image(120, 90, (50, 200, 50)).save(fixture_dir / "bmp_basic.bmp")
    create_basic_image(80, 60, (50, 50, 200)).save(fixture_dir / "webp_basic.webp")
    create_basic_image(40, 30, (0, 0, 0)).convert("1").save(fixture_dir / "wbmp_basic.wbmp", format="WBMP")

    # PNG content behind a misleading extension
    create_basic_image(30, 20, (10, 20, 30)).save(fixture_dir / "png_named_jpg.jpg", format="PNG")

    # Unsupported content
    create_basic_image(50, 50, (0, 0, 0)).save(fixture_dir / "tiff_basic.tif")
    (fixture_dir / "not_an_image.txt").write_text("definitely not pixels")

    return fixture_dir


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings that keep temporary files inside the test's tmp_path"""
    temp_dir = tmp_path / "scratch"
    temp_dir.mkdir()
    return Settings(temp_dir=str(temp_dir))
