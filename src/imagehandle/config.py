"""
Runtime configuration

Settings are read from IMAGEHANDLE_* environment variables. Handles accept
an explicit Settings instance; otherwise they use the cached get_settings().
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

from PIL import Image

ENV_PREFIX = "IMAGEHANDLE_"

RESAMPLE_FILTERS = {
    "BILINEAR": Image.Resampling.BILINEAR,
    "BICUBIC": Image.Resampling.BICUBIC,
    "LANCZOS": Image.Resampling.LANCZOS,
    "BOX": Image.Resampling.BOX,
    "HAMMING": Image.Resampling.HAMMING,
}


@dataclass(frozen=True)
class Settings:
    """
    Tunables for handles, encoders and the HTTP service.

    Attributes:
        temp_dir: Directory for display() scratch files (None = system default)
        temp_prefix: Filename prefix for scratch files
        jpeg_quality: JPEG encoder quality 1-95
        webp_quality: WEBP encoder quality 1-100
        resample: Name of the smooth resampling filter used by thumbnail()
        max_pixels: Largest blank bitmap create() will allocate
        chunk_size: Read size when streaming a file in display()
        default_max_size: Thumbnail bound used by the service when none is given
    """
    temp_dir: Optional[str] = None
    temp_prefix: str = "imagehandle_"
    jpeg_quality: int = 75
    webp_quality: int = 80
    resample: str = "LANCZOS"
    max_pixels: int = 178956970
    chunk_size: int = 65536
    default_max_size: int = 256

    def __post_init__(self):
        if self.resample not in RESAMPLE_FILTERS:
            raise ValueError(
                f"resample must be one of {', '.join(sorted(RESAMPLE_FILTERS))}, got {self.resample!r}"
            )
        if not 1 <= self.jpeg_quality <= 95:
            raise ValueError(f"jpeg_quality must be 1-95, got {self.jpeg_quality}")
        if not 1 <= self.webp_quality <= 100:
            raise ValueError(f"webp_quality must be 1-100, got {self.webp_quality}")
        for name in ("max_pixels", "chunk_size", "default_max_size"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")

    @property
    def resample_filter(self) -> Image.Resampling:
        return RESAMPLE_FILTERS[self.resample]

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Settings with defaults for every unset variable

        Raises:
            ValueError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        values = {}

        for name in ("temp_dir", "temp_prefix"):
            raw = env.get(ENV_PREFIX + name.upper())
            if raw:
                values[name] = raw

        raw = env.get(ENV_PREFIX + "RESAMPLE")
        if raw:
            values["resample"] = raw.strip().upper()

        for name in ("jpeg_quality", "webp_quality", "max_pixels", "chunk_size", "default_max_size"):
            key = ENV_PREFIX + name.upper()
            raw = env.get(key)
            if raw is None or raw == "":
                continue
            try:
                values[name] = int(raw)
            except ValueError:
                raise ValueError(f"{key} must be an integer, got {raw!r}") from None

        return cls(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read from the environment once."""
    return Settings.from_env()
