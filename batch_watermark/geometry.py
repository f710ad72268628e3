from __future__ import annotations

from typing import NamedTuple, Tuple

from . import config
from .models import Point, Size


class ScaledPoint(NamedTuple):
    x: float
    y: float
    scale: float


def map_preview_point_to_target(
    point: Tuple[float, float],
    preview_size: Tuple[float, float],
    target_size: Tuple[float, float],
) -> ScaledPoint:
    """Convert a preview-canvas point to the target image's pixel space.

    The preview is a uniformly scaled copy of the target, so one factor (taken
    from the heights) also scales font size and stroke width.
    """
    px, py = point
    pw, ph = preview_size
    tw, th = target_size
    if pw <= 0 or ph <= 0:
        raise ValueError(f"preview size must be positive, got {pw}x{ph}")
    return ScaledPoint(x=tw * (px / pw), y=th * (py / ph), scale=th / ph)


def fit_preview_size(source_size: Tuple[float, float], max_width: int = config.PREVIEW_MAX_WIDTH) -> Size:
    """Shrink ``source_size`` to ``max_width`` keeping the aspect ratio."""
    w, h = source_size
    if w > max_width:
        return Size(max_width, h / (w / max_width))
    return Size(w, h)


def offset(anchor: Point, start: Point, current: Point) -> Point:
    return anchor + (current - start)
