"""img_resize - Orientation-aware image resize, fit/cover canvases and watermarking."""

from .algo.geometry import FitPlan, plan_fit, plan_watermark, resolve_target
from .common.config import ImgResizeConfig, load_config
from .common.errors import (
    ImageNotFoundError,
    ImgResizeError,
    InvalidImageError,
    ReleasedImageError,
    UnsupportedFormatError,
)
from .common.mime import ImageMime
from .common.schemas import TargetSpec
from .document import ImageDocument

__version__ = "0.1.0"

__all__ = [
    "FitPlan",
    "ImageDocument",
    "ImageMime",
    "ImageNotFoundError",
    "ImgResizeConfig",
    "ImgResizeError",
    "InvalidImageError",
    "ReleasedImageError",
    "TargetSpec",
    "UnsupportedFormatError",
    "__version__",
    "load_config",
    "plan_fit",
    "plan_watermark",
    "resolve_target",
]
