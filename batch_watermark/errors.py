"""Exceptions raised by the watermark pipeline."""

from __future__ import annotations

from typing import Iterable, Tuple


class WatermarkError(Exception):
    """Base class for every watermark failure."""


class ValidationError(WatermarkError):
    """One or more style fields could not be parsed."""

    def __init__(self, invalid_fields: Iterable[str]):
        self.invalid_fields: Tuple[str, ...] = tuple(invalid_fields)
        super().__init__("Invalid field(s): " + ", ".join(self.invalid_fields))


class NoFilesSelectedError(WatermarkError):
    def __init__(self, message: str = "No file selected"):
        super().__init__(message)


class ImageDecodeError(WatermarkError):
    def __init__(self, filename: str, reason: str = ""):
        self.filename = filename
        msg = f"Cannot decode image {filename!r}"
        super().__init__(f"{msg}: {reason}" if reason else msg)


class ImageEncodeError(WatermarkError):
    def __init__(self, filename: str, reason: str = ""):
        self.filename = filename
        msg = f"Cannot encode image {filename!r}"
        super().__init__(f"{msg}: {reason}" if reason else msg)


class NoPreviewError(WatermarkError):
    def __init__(self, message: str = "No preview surface to scale the watermark from"):
        super().__init__(message)
