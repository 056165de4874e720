"""
Basic tests for imagehandle

Run with: pytest tests/
"""

from pathlib import Path

import pytest

from imagehandle import (
    AllocationError,
    ExifReader,
    ImageError,
    ImageHandle,
    ImageIOError,
    NotFoundError,
    PreconditionError,
    SourceValidator,
    UnsupportedFormatError,
    make_thumbnail,
    __version__
)


def test_version():
    """Test that version is defined"""
    assert __version__ == "1.0.0"


def test_error_hierarchy():
    """Every error is an ImageError and its closest builtin"""
    assert issubclass(NotFoundError, FileNotFoundError)
    assert issubclass(UnsupportedFormatError, ValueError)
    assert issubclass(AllocationError, MemoryError)
    assert issubclass(ImageIOError, OSError)
    for error in (NotFoundError, UnsupportedFormatError, AllocationError, PreconditionError, ImageIOError):
        assert issubclass(error, ImageError)


def test_exif_reader_nonexistent():
    """ExifReader handles a missing file gracefully"""
    assert ExifReader.read_orientation(Path("nonexistent.jpg")) is None


def test_source_validator():
    """Non-existent file should fail validation"""
    is_valid, error = SourceValidator.validate_file(Path("nonexistent.jpg"))
    assert not is_valid
    assert "not found" in error.lower()


def test_load_nonexistent():
    with pytest.raises(NotFoundError):
        ImageHandle.load("nonexistent.jpg")


def test_make_thumbnail_nonexistent(tmp_path):
    """Test make_thumbnail with non-existent file"""
    result = make_thumbnail(Path("nonexistent.jpg"), tmp_path, 100)

    assert not result.success
    assert result.error is not None
    assert "not found" in result.error.lower()
