"""Runtime configuration for img_resize.

Configuration priority:
1. Explicit ImgResizeConfig passed to ImageDocument
2. IMG_RESIZE_* environment variables (see load_config)
3. Defaults below
"""

import os

from PIL import Image
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "IMG_RESIZE_"


class ImgResizeConfig(BaseModel):
    """Encoder and compositing settings.

    Attributes:
        jpeg_quality: Quality used when encoding JPEG output
        resample: Pillow resampling filter name used for every smooth blit
        watermark_divisor: Watermark width is at most base width / divisor
        watermark_margin: Distance of the watermark from the left and bottom edges
    """

    jpeg_quality: int = Field(default=75, ge=1, le=95)
    resample: str = Field(default="LANCZOS")
    watermark_divisor: int = Field(default=4, ge=1)
    watermark_margin: int = Field(default=10, ge=0)

    @field_validator("resample")
    @classmethod
    def validate_resample(cls, v: str) -> str:
        name = v.strip().upper()
        if name not in Image.Resampling.__members__:
            raise ValueError(
                f"Unknown resampling filter '{v}'. Choose one of {list(Image.Resampling.__members__)}"
            )
        return name

    @property
    def resample_filter(self) -> Image.Resampling:
        return Image.Resampling[self.resample]


def load_config() -> ImgResizeConfig:
    """Build a config from IMG_RESIZE_* environment variables, falling back to defaults."""
    values: dict[str, str] = {}
    for field_name in ImgResizeConfig.model_fields:
        env_value = os.environ.get(f"{ENV_PREFIX}{field_name.upper()}")
        if env_value:
            values[field_name] = env_value

    return ImgResizeConfig.model_validate(values)
