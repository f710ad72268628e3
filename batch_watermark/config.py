"""Static configuration for the batch watermark tool."""

from __future__ import annotations

# ---------------------------- Preview ---------------------------- #
PREVIEW_MAX_WIDTH = 450

# ---------------------------- Text Layout ---------------------------- #
LINE_HEIGHT_FACTOR = 1.2
FONT_CANDIDATES = [
    # Noto Sans CJK / TC first so Chinese watermarks render
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/noto-cjk/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/truetype/noto/NotoSansTC-Regular.otf",
    # Common Linux
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    # macOS
    "/System/Library/Fonts/PingFang.ttc",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    # Windows (best effort typical paths)
    "C:/Windows/Fonts/msjh.ttc",
    "C:/Windows/Fonts/arial.ttf",
]

# ---------------------------- Default Style ---------------------------- #
DEFAULT_ANCHOR = (40.0, 40.0)
DEFAULT_FONT_SIZE = 30.0
DEFAULT_FONT_COLOR = "#0066cc"
DEFAULT_STROKE_WIDTH = 5.0
DEFAULT_STROKE_COLOR = "#ffffff"
DEFAULT_TEXT = "Sample Watermark"

# ---------------------------- Export ---------------------------- #
OUTPUT_FORMAT = "JPEG"
# matches the browser default for canvas.toDataURL('image/jpeg')
JPEG_QUALITY = 92
ARCHIVE_NAME = "watermarked_images.zip"
ARCHIVE_MIME = "application/zip"

# ---------------------------- UI ---------------------------- #
SUPPORTED_IMPORT_EXTS = {".jpg", ".jpeg", ".png", ".bmp", ".gif", ".webp", ".tif", ".tiff"}
