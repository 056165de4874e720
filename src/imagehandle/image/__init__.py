"""Image handle and pixel backend"""

from .backend import Backend, Decoder, Encoder, Mirror, PillowBackend, Transformer
from .channels import BufferedChannel, ResponseChannel, StreamChannel
from .formats import FormatDetector, ImageFormat
from .handle import ImageHandle
from .orientation import ORIENTATION_STEPS, apply_orientation, swaps_dimensions

__all__ = [
    "ImageHandle",
    "ImageFormat",
    "FormatDetector",
    "Backend",
    "Decoder",
    "Encoder",
    "Transformer",
    "Mirror",
    "PillowBackend",
    "ResponseChannel",
    "StreamChannel",
    "BufferedChannel",
    "ORIENTATION_STEPS",
    "apply_orientation",
    "swaps_dimensions",
]
