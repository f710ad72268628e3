from __future__ import annotations

import io
from dataclasses import dataclass

from PIL import Image

from . import config
from .geometry import fit_preview_size
from .models import Size, WatermarkContext
from .renderer import render_style


@dataclass
class PreviewSurface:
    """Image layer with a same-sized transparent text layer above it."""

    image_layer: Image.Image
    text_layer: Image.Image

    @classmethod
    def from_image(cls, source: Image.Image, max_width: int = config.PREVIEW_MAX_WIDTH) -> "PreviewSurface":
        w, h = fit_preview_size(source.size, max_width)
        size = (max(1, int(w)), max(1, int(h)))
        image_layer = source.convert("RGBA").resize(size, Image.Resampling.LANCZOS)
        text_layer = Image.new("RGBA", size, (0, 0, 0, 0))
        return cls(image_layer, text_layer)

    @property
    def size(self) -> Size:
        return Size.of(self.image_layer)

    def redraw(self, ctx: WatermarkContext, use_live: bool = False) -> Image.Image:
        render_style(ctx.text, self.text_layer, ctx.style, use_live=use_live)
        return self.text_layer

    def flatten(self) -> Image.Image:
        out = self.image_layer.copy()
        out.alpha_composite(self.text_layer)
        return out

    def text_layer_png(self) -> bytes:
        buf = io.BytesIO()
        self.text_layer.save(buf, format="PNG")
        return buf.getvalue()
