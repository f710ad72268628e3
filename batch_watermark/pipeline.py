"""Batch export: decode every upload, watermark it, zip the results."""

from __future__ import annotations

import asyncio
import io
import logging
import zipfile
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from .compositor import apply_watermark
from .errors import ImageDecodeError, NoFilesSelectedError, NoPreviewError, WatermarkError
from .models import BatchReport, CompositedResult, SourceImage, UploadedFile, WatermarkContext

logger = logging.getLogger(__name__)

FileLike = Union[UploadedFile, Tuple[str, bytes]]


# ---------------------------- Decoding ---------------------------- #
def decode_image(data: bytes, filename: str) -> SourceImage:
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
        # browsers honour the EXIF orientation tag before drawing
        img = ImageOps.exif_transpose(img)
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(filename, str(exc)) from exc
    return SourceImage(filename=filename, image=img.convert("RGBA"))


async def load_image(data: bytes, filename: str) -> SourceImage:
    return await asyncio.to_thread(decode_image, data, filename)


async def load_first_decodable(files: Sequence[FileLike]) -> Optional[SourceImage]:
    """Decode files in order and return the first one that decodes."""
    for upload in (UploadedFile(*f) for f in files):
        try:
            return await load_image(upload.data, upload.name)
        except ImageDecodeError as exc:
            logger.warning("Cannot preview %s: %s", upload.name, exc)
    return None


# ---------------------------- Packaging ---------------------------- #
def build_archive(results: Iterable[CompositedResult]) -> bytes:
    """Zip one entry per result, named by its filename.

    Filenames are used as-is; a repeated name replaces the earlier entry.
    """
    entries: Dict[str, bytes] = {}
    for result in results:
        entries[result.filename] = result.image_bytes
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buf.getvalue()


def _as_uploads(files: Sequence[FileLike], ctx: WatermarkContext) -> List[UploadedFile]:
    uploads = [UploadedFile(*f) for f in files]
    if not uploads:
        raise NoFilesSelectedError()
    # the anchor is in preview pixels; without a preview there is no scale
    if ctx.preview_size is None:
        raise NoPreviewError()
    return uploads


# ---------------------------- Export ---------------------------- #
async def export_all(files: Sequence[FileLike], ctx: WatermarkContext) -> bytes:
    """Watermark every file and return the zip archive bytes.

    All-or-nothing: the first decode or encode failure propagates and no
    archive is produced.
    """
    uploads = _as_uploads(files, ctx)
    ctx = ctx.snapshot()
    logger.info("Exporting %d image(s)", len(uploads))
    sources = await asyncio.gather(*(load_image(f.data, f.name) for f in uploads))
    results = await asyncio.gather(*(apply_watermark(s.image, s.filename, ctx) for s in sources))
    archive = await asyncio.to_thread(build_archive, results)
    logger.info("Export finished: %d entries, %d bytes", len(results), len(archive))
    return archive


async def _process_one(upload: UploadedFile, ctx: WatermarkContext) -> CompositedResult:
    source = await load_image(upload.data, upload.name)
    return await apply_watermark(source.image, source.filename, ctx)


async def export_report(files: Sequence[FileLike], ctx: WatermarkContext) -> BatchReport:
    """Like ``export_all`` but a bad file only drops its own entry."""
    uploads = _as_uploads(files, ctx)
    ctx = ctx.snapshot()
    logger.info("Exporting %d image(s) with per-file isolation", len(uploads))
    outcomes = await asyncio.gather(
        *(_process_one(f, ctx) for f in uploads), return_exceptions=True
    )
    report_results: List[CompositedResult] = []
    report = BatchReport(archive_bytes=b"")
    for upload, outcome in zip(uploads, outcomes):
        if isinstance(outcome, WatermarkError):
            logger.warning("Skipping %s: %s", upload.name, outcome)
            report.failed[upload.name] = str(outcome)
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            report_results.append(outcome)
            report.succeeded.append(upload.name)
    report.archive_bytes = await asyncio.to_thread(build_archive, report_results)
    logger.info(
        "Export finished: %d succeeded, %d failed", len(report.succeeded), len(report.failed)
    )
    return report
