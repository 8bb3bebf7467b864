"""Common module - errors, mime set, schemas and configuration."""

from .config import ImgResizeConfig, load_config
from .errors import (
    ImageNotFoundError,
    ImgResizeError,
    InvalidImageError,
    ReleasedImageError,
    UnsupportedFormatError,
)
from .mime import ImageMime
from .schemas import TargetSpec

__all__ = [
    "ImageMime",
    "ImgResizeConfig",
    "ImgResizeError",
    "ImageNotFoundError",
    "InvalidImageError",
    "ReleasedImageError",
    "TargetSpec",
    "UnsupportedFormatError",
    "load_config",
]
