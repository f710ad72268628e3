from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, NamedTuple, Optional

from PIL import Image

from . import config


# ---------------------------- Geometry ---------------------------- #
class Point(NamedTuple):
    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":  # type: ignore[override]
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)


class Size(NamedTuple):
    width: float
    height: float

    @classmethod
    def of(cls, img: Image.Image) -> "Size":
        return cls(img.width, img.height)


# ---------------------------- Style ---------------------------- #
@dataclass(frozen=True)
class StyleFields:
    """Parsed values of the four style inputs."""

    font_color: str
    font_size_px: float
    stroke_color: str
    stroke_width_px: float


@dataclass
class WatermarkStyle:
    anchor_point: Point = Point(*config.DEFAULT_ANCHOR)
    live_offset_point: Optional[Point] = None
    font_size_px: float = config.DEFAULT_FONT_SIZE
    font_color: str = config.DEFAULT_FONT_COLOR
    stroke_width_px: float = config.DEFAULT_STROKE_WIDTH
    stroke_color: str = config.DEFAULT_STROKE_COLOR

    def __post_init__(self):
        self.anchor_point = Point(*self.anchor_point)
        if self.live_offset_point is None:
            self.live_offset_point = self.anchor_point
        else:
            self.live_offset_point = Point(*self.live_offset_point)

    def apply(self, fields: StyleFields) -> None:
        self.font_color = fields.font_color
        self.font_size_px = fields.font_size_px
        self.stroke_color = fields.stroke_color
        self.stroke_width_px = fields.stroke_width_px

    def point(self, use_live: bool = False) -> Point:
        return self.live_offset_point if use_live else self.anchor_point


@dataclass
class WatermarkContext:
    """Everything a render or export call reads: style, text and preview size.

    Passed explicitly to every rendering and export function. During a batch
    export it is only read, so concurrent compositing tasks may share it.
    """

    style: WatermarkStyle = field(default_factory=WatermarkStyle)
    text: str = config.DEFAULT_TEXT
    preview_size: Optional[Size] = None

    def snapshot(self) -> "WatermarkContext":
        """Return a copy detached from later UI mutation."""
        return replace(self, style=replace(self.style))


# ---------------------------- Batch ---------------------------- #
class UploadedFile(NamedTuple):
    name: str
    data: bytes


@dataclass(frozen=True)
class SourceImage:
    filename: str
    image: Image.Image


@dataclass(frozen=True)
class CompositedResult:
    filename: str
    image_bytes: bytes


@dataclass
class BatchReport:
    archive_bytes: bytes
    succeeded: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed
