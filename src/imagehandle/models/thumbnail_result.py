"""
Thumbnail Result Model

Represents the result of thumbnailing a single image file.
"""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..image.formats import ImageFormat


@dataclass
class ThumbnailResult:
    """
    Result from thumbnailing a single image.

    Contains the written file and its dimensions, or the error that stopped it.
    """
    success: bool
    source: Optional[Path] = None
    output_path: Optional[Path] = None
    width: Optional[int] = None
    height: Optional[int] = None
    image_format: Optional[ImageFormat] = None
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        """Check if thumbnailing failed"""
        return not self.success

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        data = asdict(self)
        data["source"] = str(self.source) if self.source else None
        data["output_path"] = str(self.output_path) if self.output_path else None
        data["image_format"] = self.image_format.value if self.image_format else None
        return data
