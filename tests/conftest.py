"""Test configuration and fixtures for img_resize.

This module provides:
- Environment isolation for IMG_RESIZE_* configuration variables
- Function-scoped fixtures generating synthetic JPEG/PNG/GIF files with Pillow
"""

from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
from PIL import ExifTags, Image, ImageDraw

from img_resize.common.config import ENV_PREFIX, ImgResizeConfig

RED = (255, 0, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)

ImageFactory = Callable[..., Path]


# ============================================================================
# Environment
# ============================================================================


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure IMG_RESIZE_* variables from the host never leak into tests."""
    for field_name in ImgResizeConfig.model_fields:
        monkeypatch.delenv(f"{ENV_PREFIX}{field_name.upper()}", raising=False)


# ============================================================================
# Synthetic media
# ============================================================================


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    """Provide clean temporary directory for test outputs."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    return output_dir


@pytest.fixture
def make_split_jpeg(tmp_path: Path) -> ImageFactory:
    """Factory for a JPEG whose left half is red and right half is blue.

    The colored halves make rotations easy to verify after decoding.
    """

    def _make(
        name: str = "split.jpg",
        size: tuple[int, int] = (400, 200),
        orientation: int | None = None,
    ) -> Path:
        width, height = size
        img = Image.new("RGB", size, color=BLUE)
        draw = ImageDraw.Draw(img)
        draw.rectangle([0, 0, width // 2 - 1, height - 1], fill=RED)

        output_path = tmp_path / name
        if orientation is None:
            img.save(output_path, "JPEG", quality=95)
        else:
            exif = Image.Exif()
            exif[ExifTags.Base.Orientation] = orientation
            img.save(output_path, "JPEG", quality=95, exif=exif)

        return output_path

    return _make


@pytest.fixture
def synthetic_jpeg(make_split_jpeg: ImageFactory) -> Path:
    """400x200 JPEG without EXIF metadata."""
    return make_split_jpeg()


@pytest.fixture
def transparent_png(tmp_path: Path) -> Path:
    """100x100 RGBA PNG: left half fully transparent, right half opaque green."""
    img = Image.new("RGBA", (100, 100), color=(0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.rectangle([50, 0, 99, 99], fill=(0, 200, 0, 255))

    output_path = tmp_path / "transparent.png"
    img.save(output_path, "PNG")
    return output_path


@pytest.fixture
def palette_gif(tmp_path: Path) -> Path:
    """40x20 palette GIF with index 0 registered as transparent."""
    img = Image.new("P", (40, 20), color=0)
    palette = [0, 0, 0, 255, 0, 0, 0, 0, 255] + [0] * (256 * 3 - 9)
    img.putpalette(palette)
    draw = ImageDraw.Draw(img)
    draw.rectangle([10, 5, 19, 14], fill=1)
    draw.rectangle([25, 5, 34, 14], fill=2)

    output_path = tmp_path / "palette.gif"
    img.save(output_path, "GIF", transparency=0)
    return output_path


@pytest.fixture
def noisy_png(tmp_path: Path) -> Path:
    """64x64 PNG filled with deterministic noise (does not compress away)."""
    rng = np.random.default_rng(0)
    pixels = rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8)

    output_path = tmp_path / "noisy.png"
    Image.fromarray(pixels, "RGB").save(output_path, "PNG")
    return output_path


@pytest.fixture
def watermark_png(tmp_path: Path) -> Path:
    """300x100 opaque red PNG watermark."""
    output_path = tmp_path / "watermark.png"
    Image.new("RGBA", (300, 100), color=(255, 0, 0, 255)).save(output_path, "PNG")
    return output_path


@pytest.fixture
def white_base_jpeg(tmp_path: Path) -> Path:
    """1000x500 white JPEG base for watermark tests."""
    output_path = tmp_path / "base.jpg"
    Image.new("RGB", (1000, 500), color=WHITE).save(output_path, "JPEG", quality=95)
    return output_path
