"""Multi-line stroked text drawing on RGBA canvases."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from . import config
from .geometry import map_preview_point_to_target
from .models import Size, WatermarkStyle

logger = logging.getLogger(__name__)

Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


# ---------------------------- Font Helpers ---------------------------- #
@lru_cache(maxsize=1)
def find_default_font() -> str:
    for p in config.FONT_CANDIDATES:
        if Path(p).exists():
            return p
    return ""  # Pillow's bundled font is used instead


def load_font(size: float, font_path: Optional[str] = None) -> Font:
    path = find_default_font() if font_path is None else font_path
    size = max(1.0, size)
    if path:
        try:
            return ImageFont.truetype(path, size=size)
        except OSError:
            logger.warning("Font %s could not be loaded, using default", path)
    return ImageFont.load_default(size=size)


# ---------------------------- Layout ---------------------------- #
def split_lines(text: str) -> List[str]:
    """Split on newlines and drop blank lines before layout."""
    return [line for line in text.replace("\r\n", "\n").split("\n") if line != ""]


def line_origins(point: Tuple[float, float], font_size_px: float, count: int) -> List[Tuple[float, float]]:
    x, y = point
    line_height = font_size_px * config.LINE_HEIGHT_FACTOR
    return [(x, y + i * line_height) for i in range(count)]


def clear_canvas(canvas: Image.Image) -> None:
    canvas.paste((0, 0, 0, 0), (0, 0, canvas.width, canvas.height))


# ---------------------------- Rendering ---------------------------- #
def render_text(
    text: str,
    canvas: Image.Image,
    point: Tuple[float, float],
    font_size_px: float,
    font_color: str,
    stroke_width_px: float,
    stroke_color: str,
) -> None:
    """Clear ``canvas`` and draw ``text`` on it, stroke under fill.

    ``point`` is the left end of the first line's baseline. A stroke of width
    ``w`` is centered on the glyph outline, so it reaches ``w / 2`` outside.
    """
    if canvas.mode != "RGBA":
        raise ValueError(f"canvas must be RGBA, got {canvas.mode}")
    clear_canvas(canvas)
    lines = split_lines(text)
    if not lines:
        return
    font = load_font(font_size_px)
    outset = int(stroke_width_px / 2 + 0.5)
    # each pass is drawn on its own layer and blended, so translucent colors
    # mix with what is underneath instead of replacing it
    layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    for line, origin in zip(lines, line_origins(point, font_size_px, len(lines))):
        if outset > 0:
            draw.text(
                origin,
                line,
                font=font,
                fill=stroke_color,
                anchor="ls",
                stroke_width=outset,
                stroke_fill=stroke_color,
            )
            canvas.alpha_composite(layer)
            clear_canvas(layer)
        draw.text(origin, line, font=font, fill=font_color, anchor="ls")
        canvas.alpha_composite(layer)
        clear_canvas(layer)


def render_style(
    text: str,
    canvas: Image.Image,
    style: WatermarkStyle,
    *,
    use_live: bool = False,
    preview_size: Optional[Size] = None,
) -> None:
    """Render ``text`` with ``style``.

    With ``preview_size`` the style's point, font size and stroke width are
    treated as preview-space values and scaled into ``canvas``'s own size.
    """
    x, y = style.point(use_live)
    font_size = style.font_size_px
    stroke_width = style.stroke_width_px
    if preview_size is not None:
        x, y, scale = map_preview_point_to_target((x, y), preview_size, canvas.size)
        font_size *= scale
        stroke_width *= scale
    render_text(
        text,
        canvas,
        (x, y),
        font_size,
        style.font_color,
        stroke_width,
        style.stroke_color,
    )
