"""Checks for the user-editable style fields.

Color strings are accepted when Pillow's CSS color parser understands them
(names, ``#rgb``/``#rrggbb``, ``rgb()``, ``rgba()``, ``hsl()``, ``hsv()``).
"""

from __future__ import annotations

import logging
import math
from typing import List, Tuple

from PIL import ImageColor

from .errors import ValidationError
from .models import StyleFields

logger = logging.getLogger(__name__)

FONT_COLOR = "font_color"
FONT_SIZE = "font_size"
STROKE_COLOR = "stroke_color"
STROKE_SIZE = "stroke_size"


def validate_color(text: str) -> Tuple[str, bool]:
    color = (text or "").strip()
    if not color:
        return color, False
    try:
        ImageColor.getrgb(color)
    except ValueError:
        return color, False
    return color, True


def validate_number(text: str) -> Tuple[str, bool]:
    value = (text or "").strip()
    # float() also accepts "1_000"; a plain numeric literal never has one
    if not value or "_" in value:
        return value, False
    try:
        return value, math.isfinite(float(value))
    except ValueError:
        return value, False


def validate_configuration(
    color_text: str, size_text: str, stroke_color_text: str, stroke_size_text: str
) -> StyleFields:
    """Validate all four style fields at once.

    Every field is checked before failing so the caller can flag all of the
    offending inputs together. Raises ``ValidationError`` listing them.
    """
    invalid: List[str] = []
    color, ok = validate_color(color_text)
    if not ok:
        invalid.append(FONT_COLOR)
    size, ok = validate_number(size_text)
    if not ok or float(size) <= 0:
        invalid.append(FONT_SIZE)
    stroke_color, ok = validate_color(stroke_color_text)
    if not ok:
        invalid.append(STROKE_COLOR)
    stroke_size, ok = validate_number(stroke_size_text)
    if not ok or float(stroke_size) < 0:
        invalid.append(STROKE_SIZE)
    if invalid:
        logger.debug("Style validation failed: %s", invalid)
        raise ValidationError(invalid)
    return StyleFields(
        font_color=color,
        font_size_px=float(size),
        stroke_color=stroke_color,
        stroke_width_px=float(stroke_size),
    )
