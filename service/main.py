"""
FastAPI service for imagehandle

Exposes thumbnailing as HTTP API for language-agnostic access.
"""

import logging
import tempfile
from contextlib import ExitStack
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel

from imagehandle import (
    BufferedChannel,
    ImageError,
    ImageFormat,
    ImageHandle,
    UnsupportedFormatError,
    __version__,
    get_settings,
)

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="imagehandle API",
    description="Thumbnail service - returns EXIF-oriented, size-bounded images",
    version=__version__,
)

# CORS - allow frontends to call this service
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure based on deployment
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ErrorResponse(BaseModel):
    """Error response"""
    detail: str


# API Endpoints
@app.get("/")
def root():
    """API root - health check"""
    return {
        "service": "imagehandle API",
        "version": __version__,
        "status": "healthy",
        "formats": [f.value for f in ImageFormat],
    }


@app.post(
    "/v1/thumbnail",
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 415: {"model": ErrorResponse}},
)
async def thumbnail_endpoint(
    file: UploadFile = File(..., description="Image file to thumbnail"),
    max_size: Optional[int] = Form(None, description="Maximum width/height in pixels. Defaults to IMAGEHANDLE_DEFAULT_MAX_SIZE."),
    exif_rotate: bool = Form(True, description="Apply the EXIF orientation before resizing"),
    image_format: Optional[str] = Form(None, alias="format", description="Output format (BMP, GIF, JPEG, PNG, WBMP, WEBP). Defaults to the upload's format."),
):
    """
    Thumbnail an uploaded image and return the encoded result.

    The response body is the image file; Content-Type and Content-Length
    are the ones ImageHandle.display() emits.

    Raises:
        HTTPException 400: If the image cannot be processed
        HTTPException 415: If the upload or requested format is unsupported

    Example:
        curl -X POST http://localhost:8765/v1/thumbnail \\
          -F "file=@photo.jpg" \\
          -F "max_size=400" -o thumb.jpg
    """
    settings = get_settings()
    if max_size is None:
        max_size = settings.default_max_size
    if max_size < 1:
        raise HTTPException(status_code=400, detail=f"max_size must be >= 1, got {max_size}")

    image_bytes = await file.read()
    suffix = Path(file.filename or "").suffix

    channel = BufferedChannel()
    try:
        with tempfile.TemporaryDirectory(prefix=settings.temp_prefix, dir=settings.temp_dir) as workdir, ExitStack() as stack:
            upload_path = Path(workdir) / f"upload{suffix}"
            upload_path.write_bytes(image_bytes)

            handle = stack.enter_context(ImageHandle.load(upload_path, settings=settings))
            if exif_rotate:
                handle = stack.enter_context(handle.apply_exif_orientation())
            thumb = stack.enter_context(handle.thumbnail(max_size))
            if image_format:
                thumb.format_tag = image_format

            thumb.display(channel)

    except UnsupportedFormatError as e:
        raise HTTPException(status_code=415, detail=str(e))
    except ImageError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Thumbnail of {file.filename}: {channel.headers['Content-Length']} bytes")
    return Response(
        content=channel.body,
        media_type=channel.headers["Content-Type"],
        headers={"Content-Length": channel.headers["Content-Length"]},
    )


@app.get("/health")
def health_check():
    """Health check endpoint for monitoring"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8765)
