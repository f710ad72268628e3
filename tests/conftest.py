import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add repository root so the package and app script import without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from batch_watermark import Size, WatermarkContext, WatermarkStyle  # noqa: E402


def png_bytes(size, color=(255, 255, 255)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def ctx():
    """Red "H" anchored at (40, 40) on a 450x300 preview."""
    style = WatermarkStyle(
        anchor_point=(40, 40),
        font_size_px=30,
        font_color="#ff0000",
        stroke_width_px=5,
        stroke_color="#ff0000",
    )
    return WatermarkContext(style=style, text="H", preview_size=Size(450, 300))
