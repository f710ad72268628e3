import asyncio
import io
import zipfile

import pytest
from PIL import Image, ImageChops

from batch_watermark import (
    ImageDecodeError,
    NoFilesSelectedError,
    NoPreviewError,
    UploadedFile,
    export_all,
    export_report,
    load_first_decodable,
    load_image,
)

from conftest import png_bytes


def entries(archive: bytes):
    with zipfile.ZipFile(io.BytesIO(archive)) as zf:
        return {name: Image.open(io.BytesIO(zf.read(name))).convert("RGB") for name in zf.namelist()}


def ink_left_bottom(img):
    diff = ImageChops.difference(img, Image.new("RGB", img.size, "white")).convert("L")
    left, _, _, bottom = diff.point(lambda v: 255 if v > 60 else 0).getbbox()
    return left, bottom


def test_export_without_files_is_rejected(ctx):
    with pytest.raises(NoFilesSelectedError):
        asyncio.run(export_all([], ctx))
    with pytest.raises(NoFilesSelectedError):
        asyncio.run(export_report([], ctx))


def test_load_image_decodes_to_rgba():
    source = asyncio.run(load_image(png_bytes((30, 20)), "s.png"))
    assert source.filename == "s.png"
    assert source.image.mode == "RGBA"
    assert source.image.size == (30, 20)


def test_load_image_rejects_garbage():
    with pytest.raises(ImageDecodeError, match="junk.png"):
        asyncio.run(load_image(b"not an image", "junk.png"))


def test_export_places_watermark_proportionally(ctx):
    files = [
        UploadedFile("large.png", png_bytes((1800, 1200))),
        ("small.png", png_bytes((900, 600))),
    ]
    images = entries(asyncio.run(export_all(files, ctx)))
    assert sorted(images) == ["large.png", "small.png"]
    assert images["large.png"].size == (1800, 1200)
    assert images["small.png"].size == (900, 600)
    # anchor (40, 40) on 450x300 maps to (160, 160) at scale 4 and (80, 80) at scale 2
    large_left, large_bottom = ink_left_bottom(images["large.png"])
    small_left, small_bottom = ink_left_bottom(images["small.png"])
    assert 140 <= large_left <= 185 and 150 <= large_bottom <= 185
    assert 70 <= small_left <= 93 and 75 <= small_bottom <= 93


def test_duplicate_names_keep_last_file(ctx):
    ctx.text = ""
    files = [
        ("same.png", png_bytes((20, 20), (255, 0, 0))),
        ("same.png", png_bytes((20, 20), (0, 0, 255))),
    ]
    archive = asyncio.run(export_all(files, ctx))
    with zipfile.ZipFile(io.BytesIO(archive)) as zf:
        assert zf.namelist() == ["same.png"]
    r, g, b = entries(archive)["same.png"].getpixel((10, 10))
    assert b > 200 and r < 50


def test_one_bad_file_aborts_whole_export(ctx):
    files = [("good.png", png_bytes((40, 40))), ("bad.png", b"corrupt")]
    with pytest.raises(ImageDecodeError, match="bad.png"):
        asyncio.run(export_all(files, ctx))


def test_report_isolates_bad_files(ctx):
    files = [("good.png", png_bytes((40, 40))), ("bad.png", b"corrupt")]
    report = asyncio.run(export_report(files, ctx))
    assert not report.ok
    assert report.succeeded == ["good.png"]
    assert list(report.failed) == ["bad.png"]
    assert list(entries(report.archive_bytes)) == ["good.png"]


def test_load_image_applies_exif_orientation():
    exif = Image.Exif()
    exif[0x0112] = 6  # rotate 90 degrees clockwise on display
    buf = io.BytesIO()
    Image.new("RGB", (400, 200), "white").save(buf, format="JPEG", exif=exif.tobytes())
    source = asyncio.run(load_image(buf.getvalue(), "portrait.jpg"))
    assert source.image.size == (200, 400)


def test_first_decodable_skips_corrupt_files():
    files = [("bad.png", b"corrupt"), ("good.png", png_bytes((30, 20)))]
    source = asyncio.run(load_first_decodable(files))
    assert source.filename == "good.png"
    assert source.image.size == (30, 20)


def test_first_decodable_without_any_image():
    assert asyncio.run(load_first_decodable([("bad.png", b"corrupt")])) is None
    assert asyncio.run(load_first_decodable([])) is None


def test_export_without_preview_size_is_rejected(ctx):
    ctx.preview_size = None
    files = [("good.png", png_bytes((40, 40)))]
    with pytest.raises(NoPreviewError):
        asyncio.run(export_all(files, ctx))
    with pytest.raises(NoPreviewError):
        asyncio.run(export_report(files, ctx))
