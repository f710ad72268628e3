"""Batch text watermarking: preview placement, compositing and zip export."""

from .compositor import apply_watermark
from .drag import DragController, Dragging, Idle
from .errors import (
    ImageDecodeError,
    ImageEncodeError,
    NoFilesSelectedError,
    NoPreviewError,
    ValidationError,
    WatermarkError,
)
from .geometry import fit_preview_size, map_preview_point_to_target
from .models import (
    BatchReport,
    CompositedResult,
    Point,
    Size,
    SourceImage,
    StyleFields,
    UploadedFile,
    WatermarkContext,
    WatermarkStyle,
)
from .pipeline import export_all, export_report, load_first_decodable, load_image
from .preview import PreviewSurface
from .renderer import render_style, render_text
from .validator import validate_color, validate_configuration, validate_number

__all__ = [
    "BatchReport",
    "CompositedResult",
    "DragController",
    "Dragging",
    "Idle",
    "ImageDecodeError",
    "ImageEncodeError",
    "NoFilesSelectedError",
    "NoPreviewError",
    "Point",
    "PreviewSurface",
    "Size",
    "SourceImage",
    "StyleFields",
    "UploadedFile",
    "ValidationError",
    "WatermarkContext",
    "WatermarkError",
    "WatermarkStyle",
    "apply_watermark",
    "export_all",
    "export_report",
    "fit_preview_size",
    "load_first_decodable",
    "load_image",
    "map_preview_point_to_target",
    "render_style",
    "render_text",
    "validate_color",
    "validate_configuration",
    "validate_number",
]
