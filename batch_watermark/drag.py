"""Pointer-driven placement of the watermark on the preview surface."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .geometry import offset
from .models import Point, WatermarkStyle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    start: Point
    anchor: Point


DragState = Union[Idle, Dragging]


class DragController:
    """Idle/Dragging state machine over pointer events.

    ``validate`` is consulted on every pointer-down; a falsy result keeps the
    controller idle. ``redraw`` is called after each move so the preview can
    show the live offset point.
    """

    def __init__(
        self,
        style: WatermarkStyle,
        validate: Optional[Callable[[], bool]] = None,
        redraw: Optional[Callable[[WatermarkStyle], None]] = None,
    ):
        self.style = style
        self._validate = validate or (lambda: True)
        self._redraw = redraw
        self.state: DragState = Idle()

    @property
    def dragging(self) -> bool:
        return isinstance(self.state, Dragging)

    def pointer_down(self, p) -> bool:
        if not self._validate():
            self.state = Idle()
            return False
        # a second pointer-down without pointer-up just restarts from p
        self.state = Dragging(start=Point(*p), anchor=self.style.anchor_point)
        self.style.live_offset_point = self.style.anchor_point
        return True

    def pointer_move(self, p) -> None:
        state = self.state
        if not isinstance(state, Dragging):
            return
        self.style.live_offset_point = offset(state.anchor, state.start, Point(*p))
        if self._redraw is not None:
            self._redraw(self.style)

    def pointer_up(self) -> None:
        if not isinstance(self.state, Dragging):
            return
        self.style.anchor_point = self.style.live_offset_point
        self.state = Idle()
        logger.debug("Watermark anchor committed at %s", self.style.anchor_point)
