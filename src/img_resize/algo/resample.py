"""Alpha-aware resampling and compositing on Pillow images."""

from pathlib import Path

from loguru import logger
from PIL import Image

from .. import codec
from ..common.errors import UnsupportedFormatError
from ..common.schemas import TargetSpec
from ..utils.profiling import timed
from .geometry import FitPlan, plan_fit, plan_watermark, resolve_target

TRANSPARENT = (0, 0, 0, 0)


def new_canvas(size: tuple[int, int]) -> Image.Image:
    """Fully transparent RGBA canvas."""
    return Image.new("RGBA", size, TRANSPARENT)


def clone_image(image: Image.Image) -> Image.Image:
    """Copy ``image`` into a freshly allocated buffer of the same size.

    Truecolor sources become a plain RGBA copy. Palette sources keep their
    palette; when a transparent index is registered the canvas is pre-filled
    with that index before the pixels are copied.
    """
    if codec.is_truecolor(image):
        return image.copy() if image.mode == "RGBA" else image.convert("RGBA")

    trans = codec.transparent_index(image)
    clone = Image.new("P", image.size, trans if trans is not None else 0)
    palette = image.getpalette()
    if palette is not None:
        clone.putpalette(palette)
    if trans is not None:
        clone.info["transparency"] = trans

    clone.paste(image, (0, 0))
    return clone


def paint(canvas: Image.Image, source: Image.Image, plan: FitPlan, resample: Image.Resampling) -> None:
    """Resample ``source`` to the plan's blit size and blend it onto ``canvas`` in place.

    ``canvas`` must be RGBA. Parts of the blit outside the canvas are clipped.
    """
    rgba = source if source.mode == "RGBA" else source.convert("RGBA")
    scaled = rgba.resize(plan.blit_size, resample)

    layer = new_canvas(canvas.size)
    layer.paste(scaled, plan.offset)
    canvas.alpha_composite(layer)

    layer.close()
    scaled.close()
    if rgba is not source:
        rgba.close()


@timed
def resize_to(
    image: Image.Image,
    target: TargetSpec,
    resample: Image.Resampling = Image.Resampling.LANCZOS,
) -> Image.Image:
    """Resize into a new transparent canvas per ``target``.

    Returns an unscaled clone when the target has no size. The returned
    image is owned by the caller.
    """
    target_size = resolve_target(image.size, target.width, target.height)
    if target_size is None:
        return clone_image(image)

    plan = plan_fit(image.size, target_size, target.extend)
    logger.debug(
        f"Resizing {image.size} -> canvas {plan.canvas_size}, "
        f"blit {plan.blit_size} at {plan.offset} (extend={target.extend})"
    )

    canvas = new_canvas(plan.canvas_size)
    paint(canvas, image, plan, resample)
    return canvas


@timed
def composite_watermark(
    base: Image.Image,
    watermark_path: str | Path,
    divisor: int = 4,
    margin: int = 10,
    resample: Image.Resampling = Image.Resampling.LANCZOS,
) -> tuple[Image.Image, bool]:
    """Paint a PNG/GIF watermark at the bottom-left corner of ``base``.

    Returns:
        (image, painted). ``image`` is ``base`` itself when it already was
        RGBA, otherwise an RGBA conversion of it. ``painted`` is False and
        ``base`` is returned untouched when the watermark file is missing.

    Raises:
        UnsupportedFormatError: If the watermark is not a transparency-capable format
        InvalidImageError: If the watermark cannot be decoded
    """
    watermark_path = Path(watermark_path)
    if not watermark_path.is_file():
        logger.warning(f"Watermark not found, skipping: {watermark_path}")
        return base, False

    data = watermark_path.read_bytes()
    probed = codec.probe(data)
    if probed.mime is None or not probed.mime.supports_transparency:
        raise UnsupportedFormatError(
            f"Watermark must be PNG or GIF, got {probed.pil_format or 'unknown'}: {watermark_path}"
        )

    mark = codec.decode(data)
    try:
        plan = plan_watermark(base.size, mark.size, divisor=divisor, margin=margin)
        logger.debug(f"Watermark {mark.size} -> {plan.blit_size} at {plan.offset}")

        canvas = base if base.mode == "RGBA" else base.convert("RGBA")
        paint(canvas, mark, plan, resample)
    finally:
        mark.close()

    return canvas, True
