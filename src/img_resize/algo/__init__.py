"""Geometry, resample/composite and persistence algorithms."""

from .geometry import FitPlan, plan_fit, plan_watermark, resolve_target, round_half_away
from .persistence import save_image
from .resample import clone_image, composite_watermark, new_canvas, resize_to

__all__ = [
    "FitPlan",
    "clone_image",
    "composite_watermark",
    "new_canvas",
    "plan_fit",
    "plan_watermark",
    "resize_to",
    "resolve_target",
    "round_half_away",
    "save_image",
]
