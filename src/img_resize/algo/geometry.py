"""Pure canvas/blit geometry for fit, cover and watermark placement.

No I/O and no Pillow objects: everything works on (width, height) tuples.

Every size and offset is computed from the exact float value and rounded
half away from zero; blit sizes are never smaller than one pixel.
"""

import math
from dataclasses import dataclass

Size = tuple[int, int]
Point = tuple[int, int]


@dataclass(frozen=True)
class FitPlan:
    """Where and how large to paint a scaled source on a canvas.

    Attributes:
        canvas_size: Output canvas (width, height)
        blit_size: Scaled source (width, height); may exceed the canvas in cover mode
        offset: Top-left (x, y) of the blit on the canvas; negative when cropped
    """

    canvas_size: Size
    blit_size: Size
    offset: Point


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _check_size(size: Size, name: str) -> None:
    w, h = size
    if w <= 0 or h <= 0:
        raise ValueError(f"{name} must be positive, got {w}x{h}")


def resolve_target(source_size: Size, width: int | None, height: int | None) -> Size | None:
    """Fill in a missing target dimension from the source aspect ratio.

    Returns:
        (width, height) of the target canvas, or None when neither is given
    """
    _check_size(source_size, "Source size")
    w, h = source_size

    if width is not None and height is not None:
        target = (width, height)
    elif width is not None:
        target = (width, max(1, round_half_away(width * h / w)))
    elif height is not None:
        target = (max(1, round_half_away(height * w / h)), height)
    else:
        return None

    _check_size(target, "Target size")
    return target


def plan_fit(source_size: Size, target_size: Size, extend: bool = True) -> FitPlan:
    """Compute blit size and offset of the source inside the target canvas.

    extend=True fits the whole source inside the target (smaller scale, the
    remaining strips stay transparent). extend=False covers the whole target
    (larger scale, the overflow is cropped). Both center the source.
    """
    _check_size(source_size, "Source size")
    _check_size(target_size, "Target size")
    w, h = source_size
    ww, hh = target_size

    ratio = w / h
    right_ratio = ww / hh

    if extend:
        if ratio < right_ratio:
            # Source is narrower: full height, pad left/right
            new_width = w * hh / h
            blit = (max(1, round_half_away(new_width)), hh)
            offset = (round_half_away((ww - new_width) / 2), 0)
        else:
            # Source is wider: full width, pad top/bottom
            new_height = h * ww / w
            blit = (ww, max(1, round_half_away(new_height)))
            offset = (0, round_half_away((hh - new_height) / 2))
    else:
        if ratio < right_ratio:
            # Source is narrower: full width, crop top/bottom
            new_height = h * ww / w
            blit = (ww, max(1, round_half_away(new_height)))
            offset = (0, round_half_away((hh - new_height) / 2))
        else:
            # Source is wider: full height, crop left/right
            new_width = w * hh / h
            blit = (max(1, round_half_away(new_width)), hh)
            offset = (round_half_away((ww - new_width) / 2), 0)

    return FitPlan(canvas_size=(ww, hh), blit_size=blit, offset=offset)


def plan_watermark(
    base_size: Size,
    mark_size: Size,
    divisor: int = 4,
    margin: int = 10,
) -> FitPlan:
    """Place a watermark at the bottom-left corner of a base image.

    The mark is displayed at base width / divisor, never wider than its native
    width, with proportional height, ``margin`` pixels from the left and bottom.
    """
    _check_size(base_size, "Base size")
    _check_size(mark_size, "Watermark size")
    base_w, base_h = base_size
    mark_w, mark_h = mark_size

    width = min(base_w / divisor, mark_w)
    height = width * mark_h / mark_w

    blit = (max(1, round_half_away(width)), max(1, round_half_away(height)))
    offset = (margin, base_h - blit[1] - margin)

    return FitPlan(canvas_size=base_size, blit_size=blit, offset=offset)
