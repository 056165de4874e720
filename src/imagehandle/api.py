"""
High-level API for imagehandle

Convenience functions that run the load -> orient -> thumbnail -> save
pipeline and report the outcome instead of raising.
"""

import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from .config import Settings
from .errors import ImageError
from .image.formats import ImageFormat
from .image.handle import ImageHandle, PathLike
from .models.thumbnail_result import ThumbnailResult

logger = logging.getLogger(__name__)


def _output_name(source: Path, image_format: Optional[ImageFormat]) -> str:
    if image_format is None:
        return source.name
    return source.stem + image_format.extension


def make_thumbnail(
    source: PathLike,
    destination: PathLike,
    max_size: int,
    exif_rotate: bool = True,
    image_format: Union[ImageFormat, str, None] = None,
    settings: Optional[Settings] = None
) -> ThumbnailResult:
    """
    Write a thumbnail of one image file.

    Args:
        source: Image file to read
        destination: Output file, or existing directory to write into
                     (the source filename is kept, with the extension of
                     image_format if one is given)
        max_size: Maximum width and height of the thumbnail
        exif_rotate: Apply the source's EXIF orientation first
        image_format: Output format; None keeps the source format
        settings: Settings for the handles (default: from environment)

    Returns:
        ThumbnailResult; failures carry the error message

    Example:
        >>> from imagehandle import make_thumbnail
        >>>
        >>> result = make_thumbnail("photo.jpg", "thumbs/", 400)
        >>> if result.success:
        ...     print(f"{result.output_path}: {result.width}x{result.height}")
    """
    source = Path(source)
    destination = Path(destination)

    try:
        if isinstance(image_format, str):
            image_format = ImageFormat.from_name(image_format)

        with ExitStack() as stack:
            handle = stack.enter_context(ImageHandle.load(source, settings=settings))
            if exif_rotate:
                handle = stack.enter_context(handle.apply_exif_orientation())
            thumb = stack.enter_context(handle.thumbnail(max_size))

            if image_format is not None:
                thumb.format_tag = image_format

            target = destination
            if destination.is_dir():
                target = destination / _output_name(source, image_format)
            thumb.save(target)

            return ThumbnailResult(
                success=True,
                source=source,
                output_path=thumb.last_saved_path,
                width=thumb.width,
                height=thumb.height,
                image_format=thumb.format_tag,
            )

    except (ImageError, OSError, ValueError) as e:
        logger.debug(f"Thumbnail of {source} failed: {e}")
        return ThumbnailResult(success=False, source=source, error=str(e))


def batch_thumbnails(
    sources: Iterable[PathLike],
    destination_dir: PathLike,
    max_size: int,
    exif_rotate: bool = True,
    image_format: Union[ImageFormat, str, None] = None,
    settings: Optional[Settings] = None,
    progress_callback: Optional[Callable[[int, int, ThumbnailResult], None]] = None
) -> List[ThumbnailResult]:
    """
    Thumbnail multiple images into one directory with optional progress tracking.

    Args:
        sources: Image files to read
        destination_dir: Existing directory for the thumbnails
        max_size: Maximum width and height of each thumbnail
        exif_rotate: Apply each source's EXIF orientation first
        image_format: Output format; None keeps each source's format
        settings: Settings for the handles (default: from environment)
        progress_callback: Optional callback(current, total, result)

    Returns:
        List of ThumbnailResult objects, in source order

    Example:
        >>> from pathlib import Path
        >>> from imagehandle import batch_thumbnails
        >>>
        >>> def on_progress(current, total, result):
        ...     status = "ok" if result.success else result.error
        ...     print(f"[{current}/{total}] {result.source.name}: {status}")
        >>>
        >>> results = batch_thumbnails(Path("photos").glob("*.jpg"), "thumbs", 400,
        ...                            progress_callback=on_progress)
    """
    sources = list(sources)
    results = []
    total = len(sources)

    for i, source in enumerate(sources, 1):
        result = make_thumbnail(
            source,
            destination_dir,
            max_size,
            exif_rotate=exif_rotate,
            image_format=image_format,
            settings=settings,
        )
        results.append(result)

        if progress_callback:
            progress_callback(i, total, result)

    return results
