"""
Image Handle

One decoded bitmap plus the bookkeeping needed to save and serve it.

Transforms (thumbnail, apply_exif_orientation) never modify the receiver:
they return a new handle that owns a fresh bitmap. save() and display()
only update the receiver's file bookkeeping.

Example:
    >>> with ImageHandle.load("photo.jpg") as photo:
    ...     with photo.apply_exif_orientation() as upright:
    ...         with upright.thumbnail(400) as thumb:
    ...             thumb.save("/var/thumbs/photo.jpg")
"""

import logging
import os
import sys
import tempfile
import weakref
from pathlib import Path
from typing import Optional, Union

from PIL import Image

from ..config import Settings, get_settings
from ..errors import AllocationError, ImageIOError, NotFoundError, PreconditionError
from ..metadata.exif_reader import ExifReader
from ..validation.source_validator import SourceValidator
from .backend import Backend, PillowBackend
from .channels import ResponseChannel, StreamChannel
from .formats import FormatDetector, ImageFormat
from .orientation import ORIENTATION_STEPS, apply_orientation

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _remove_temp_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not remove temporary file {path}: {e}")


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ImageHandle:
    """
    In-memory image with its file metadata.

    Build one with ImageHandle.create() or ImageHandle.load(). Call close()
    (or use the handle as a context manager) to release the bitmap and any
    temporary file created by display().

    Attributes:
        source_path: File the bitmap was decoded from, if any
        last_saved_path: Most recent path written by save()
        first_source_path: First file associated with the handle, set by save()
        temp_path: Scratch file created by display(), if any
        settings: Settings shared with every handle derived from this one
    """

    def __init__(
        self,
        bitmap: Image.Image,
        image_format: Optional[ImageFormat] = None,
        source_path: Optional[Path] = None,
        settings: Optional[Settings] = None,
        backend: Optional[Backend] = None
    ):
        self.settings = settings or get_settings()
        self._backend = backend or PillowBackend(self.settings)
        self._bitmap: Optional[Image.Image] = bitmap
        self._format_tag: Optional[ImageFormat] = None
        self.format_tag = image_format
        self.source_path = source_path
        # Format of the bytes at current_path, which may differ from format_tag
        self._file_format: Optional[ImageFormat] = self._format_tag if source_path is not None else None
        self.last_saved_path: Optional[Path] = None
        self.first_source_path: Optional[Path] = None
        self.temp_path: Optional[Path] = None
        self._temp_finalizer: Optional[weakref.finalize] = None
        self._closed = False
        self._displayed = False

    # Construction

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        settings: Optional[Settings] = None,
        backend: Optional[Backend] = None
    ) -> "ImageHandle":
        """
        Allocate a blank true-color image.

        Args:
            width: Width in pixels (> 0)
            height: Height in pixels (> 0)

        Raises:
            AllocationError: If the dimensions are invalid or too large,
                or the bitmap cannot be allocated
        """
        settings = settings or get_settings()
        if not (_is_positive_int(width) and _is_positive_int(height)):
            raise AllocationError(f"Cannot allocate a {width}x{height} image.")
        if width * height > settings.max_pixels:
            raise AllocationError(
                f"Cannot allocate a {width}x{height} image (max {settings.max_pixels} pixels)."
            )

        backend = backend or PillowBackend(settings)
        try:
            bitmap = backend.blank((width, height))
        except (MemoryError, ValueError) as e:
            raise AllocationError("Cannot initialize new image stream.") from e

        return cls(bitmap, settings=settings, backend=backend)

    @classmethod
    def load(
        cls,
        path: PathLike,
        settings: Optional[Settings] = None,
        backend: Optional[Backend] = None
    ) -> "ImageHandle":
        """
        Decode an image file.

        The format is detected from the file header, then the whole file is
        decoded with that format's decoder.

        Args:
            path: Path to a BMP, GIF, JPEG, PNG, WBMP or WEBP file

        Raises:
            NotFoundError: If the file does not exist or is not readable
            UnsupportedFormatError: If the file is in any other format
            AllocationError: If the header or pixel data cannot be decoded
        """
        source = Path(path)
        is_valid, error = SourceValidator.validate_file(source)
        if not is_valid:
            raise NotFoundError(error)

        try:
            width, height, image_format = FormatDetector.probe(source)
        except (Image.DecompressionBombError, OSError) as e:
            # Plugins reject malformed headers of a recognised format with OSError.
            raise AllocationError(f'Cannot initialize image stream for "{source}": {e}') from e

        settings = settings or get_settings()
        backend = backend or PillowBackend(settings)
        try:
            bitmap = backend.decode(source, image_format)
        except Exception as e:
            raise AllocationError(f'Cannot initialize image stream for "{source}": {e}') from e

        logger.debug(f"Loaded {source} ({image_format.value} {width}x{height})")
        return cls(
            bitmap,
            image_format=image_format,
            source_path=source,
            settings=settings,
            backend=backend
        )

    # Metadata

    @property
    def bitmap(self) -> Image.Image:
        self._ensure_open()
        return self._bitmap

    @property
    def width(self) -> int:
        return self.bitmap.width

    @property
    def height(self) -> int:
        return self.bitmap.height

    @property
    def size(self):
        return self.bitmap.size

    @property
    def format_tag(self) -> Optional[ImageFormat]:
        return self._format_tag

    @format_tag.setter
    def format_tag(self, value: Union[ImageFormat, str, None]) -> None:
        if isinstance(value, str):
            value = ImageFormat.from_name(value)
        self._format_tag = value

    @property
    def current_path(self) -> Optional[Path]:
        """File currently associated with the handle: last save, else source"""
        return self.last_saved_path or self.source_path

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def displayed(self) -> bool:
        return self._displayed

    # Transforms

    def thumbnail(self, max_size: int) -> "ImageHandle":
        """
        Scaled copy whose larger side is at most max_size.

        Aspect ratio is kept; the scaled side is truncated to an integer.
        When width and height are equal, width drives the scale. Images that
        already fit are copied pixel for pixel.

        Args:
            max_size: Maximum width and height in pixels

        Returns:
            New handle with the same format tag and no source path
        """
        self._ensure_usable()
        if not _is_positive_int(max_size):
            raise ValueError(f"max_size must be a positive integer, got {max_size!r}")

        width, height = self.width, self.height
        if max(width, height) > max_size:
            if width >= height:
                new_width = max_size
                new_height = height / width * new_width
            else:
                new_height = max_size
                new_width = width / height * new_height
            size = (max(1, int(new_width)), max(1, int(new_height)))

            try:
                bitmap = self._backend.resample(self._bitmap, size)
            except (MemoryError, ValueError) as e:
                raise AllocationError("Cannot initialize new image stream.") from e
            logger.debug(f"Thumbnail {width}x{height} -> {size[0]}x{size[1]}")
        else:
            bitmap = self._backend.copy(self._bitmap)
            logger.debug(f"Thumbnail {width}x{height} fits within {max_size}, copied")

        return self._derive(bitmap)

    def apply_exif_orientation(self) -> "ImageHandle":
        """
        Upright copy according to the source file's EXIF Orientation.

        EXIF is read again from source_path, not from the bitmap. A file
        without EXIF (or with an unreadable block) yields a plain copy.

        Returns:
            New handle with the same format tag and no source path

        Raises:
            PreconditionError: If the handle has no source file
        """
        self._ensure_usable()
        if self.source_path is None:
            raise PreconditionError("Source file must be defined before applying EXIF orientation.")

        orientation = ExifReader.read_orientation(self.source_path)
        if orientation in ORIENTATION_STEPS:
            bitmap = apply_orientation(self._bitmap, orientation, self._backend)
            logger.debug(f"Applied EXIF orientation {orientation} from {self.source_path}")
        else:
            bitmap = self._backend.copy(self._bitmap)

        return self._derive(bitmap)

    def _derive(self, bitmap: Image.Image) -> "ImageHandle":
        return ImageHandle(
            bitmap,
            image_format=self.format_tag,
            settings=self.settings,
            backend=self._backend
        )

    # Output

    def save(self, path: PathLike) -> bool:
        """
        Encode the image to path.

        If path is an existing directory, the name of the current file is
        appended. Without a format tag the image is written as PNG and the
        tag becomes PNG.

        Args:
            path: Destination file or directory

        Returns:
            True once the file is written

        Raises:
            PreconditionError: If path is a directory and the handle has no file name
            ImageIOError: If encoding or writing fails
        """
        self._ensure_usable()
        target = Path(path)
        current = self.current_path
        if target.is_dir():
            if current is None:
                raise PreconditionError(
                    f'Cannot save into directory "{target}": the image has no file name.'
                )
            target = target / current.name

        if self.format_tag is None:
            self.format_tag = ImageFormat.PNG

        try:
            self._backend.encode(self._bitmap, target, self.format_tag)
        except (OSError, ValueError) as e:
            raise ImageIOError(f'Cannot write image to "{target}": {e}') from e

        if current is not None and self.first_source_path is None:
            self.first_source_path = current
        self.last_saved_path = target
        self._file_format = self.format_tag

        logger.debug(f"Saved {self.format_tag.value} {self.width}x{self.height} to {target}")
        return True

    def display(self, channel: Optional[ResponseChannel] = None) -> None:
        """
        Send the image file as a response: Content-Type, Content-Length, bytes.

        A handle with no file, or whose format tag no longer matches the
        file, is first saved to a temporary file, removed again by close().
        This is terminal: the handle accepts no further image operations.
        With the default channel the response goes to stdout and the
        process exits.

        Args:
            channel: Where to send the response (default: stdout, then exit)

        Raises:
            PreconditionError: If no file or format can be resolved
            ImageIOError: If the file cannot be written or read
        """
        self._ensure_usable()
        if self.current_path is None or self._file_format is not self.format_tag:
            if self.temp_path is None:
                self._create_temp_file()
            self.save(self.temp_path)

        path = self.current_path
        if path is None or self.format_tag is None:
            raise PreconditionError("File (and format) must be defined before displaying the image.")

        try:
            fp = open(path, "rb")
        except OSError as e:
            raise ImageIOError(f'Cannot read "{path}": {e}') from e

        if channel is None:
            channel = StreamChannel(sys.stdout.buffer, terminate=True)

        with fp:
            content_length = os.fstat(fp.fileno()).st_size
            self._displayed = True
            logger.debug(f"Displaying {path} ({self.format_tag.mime_type}, {content_length} bytes)")

            channel.send_header("Content-Type", self.format_tag.mime_type)
            channel.send_header("Content-Length", str(content_length))
            for chunk in iter(lambda: fp.read(self.settings.chunk_size), b""):
                channel.write(chunk)

        channel.close()

    def _create_temp_file(self) -> None:
        try:
            fd, name = tempfile.mkstemp(prefix=self.settings.temp_prefix, dir=self.settings.temp_dir)
        except OSError as e:
            raise ImageIOError(f"Unable to create temporary file: {e}") from e
        os.close(fd)

        self.temp_path = Path(name)
        self._temp_finalizer = weakref.finalize(self, _remove_temp_file, self.temp_path)

    # Lifecycle

    def _ensure_open(self) -> None:
        if self._closed:
            raise PreconditionError("Image handle is closed.")

    def _ensure_usable(self) -> None:
        self._ensure_open()
        if self._displayed:
            raise PreconditionError("Image has already been displayed.")

    def close(self) -> None:
        """Release the bitmap and delete the temporary file, if any. Idempotent."""
        if self._closed:
            return
        self._closed = True

        if self._bitmap is not None:
            self._bitmap.close()
            self._bitmap = None

        if self._temp_finalizer is not None:
            self._temp_finalizer()

    def __enter__(self) -> "ImageHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        if self._closed:
            return "<ImageHandle closed>"
        image_format = self.format_tag.value if self.format_tag else None
        return f"<ImageHandle {self.width}x{self.height} format={image_format} path={self.current_path}>"
