from __future__ import annotations

import asyncio
import io
import logging

from PIL import Image

from . import config
from .errors import ImageEncodeError
from .models import CompositedResult, WatermarkContext
from .renderer import render_style

logger = logging.getLogger(__name__)


def build_text_layer(source: Image.Image, ctx: WatermarkContext) -> Image.Image:
    """Render the watermark on a transparent canvas sized like ``source``.

    Without a preview size the style is taken to be in source pixels already.
    """
    layer = Image.new("RGBA", source.size, (0, 0, 0, 0))
    render_style(ctx.text, layer, ctx.style, preview_size=ctx.preview_size)
    return layer


def composite(source: Image.Image, layer: Image.Image) -> Image.Image:
    out = Image.new("RGBA", source.size, (0, 0, 0, 0))
    out.alpha_composite(source.convert("RGBA"))
    out.alpha_composite(layer)
    return out


def encode_image(img: Image.Image, filename: str) -> bytes:
    buf = io.BytesIO()
    try:
        img.convert("RGB").save(buf, format=config.OUTPUT_FORMAT, quality=config.JPEG_QUALITY)
    except (OSError, ValueError) as exc:
        raise ImageEncodeError(filename, str(exc)) from exc
    return buf.getvalue()


def _apply_watermark_sync(source: Image.Image, filename: str, ctx: WatermarkContext) -> CompositedResult:
    layer = build_text_layer(source, ctx)
    result = composite(source, layer)
    data = encode_image(result, filename)
    logger.debug("Watermarked %s (%dx%d, %d bytes)", filename, source.width, source.height, len(data))
    return CompositedResult(filename=filename, image_bytes=data)


async def apply_watermark(source: Image.Image, filename: str, ctx: WatermarkContext) -> CompositedResult:
    """Composite the watermark over ``source`` and encode it.

    The Pillow work runs in a worker thread; ``source`` is not modified.
    """
    return await asyncio.to_thread(_apply_watermark_sync, source, filename, ctx)
