"""Streamlit Batch Text Watermark Application

Implements:
 - Multi-image upload; the first image that decodes becomes the preview surface
 - Text watermark with font size/color and stroke width/color, validated as typed
 - Drag positioning on a scaled preview (using streamlit-drawable-canvas)
 - Batch export of every image, watermarked at full resolution, as one ZIP
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import Dict, List, Optional

import streamlit as st
from streamlit_drawable_canvas import st_canvas

from batch_watermark import (
    DragController,
    PreviewSurface,
    UploadedFile,
    ValidationError,
    WatermarkContext,
    WatermarkError,
    export_all,
    export_report,
    load_first_decodable,
    validate_color,
    validate_configuration,
    validate_number,
)
from batch_watermark import config
from batch_watermark.validator import FONT_COLOR, FONT_SIZE, STROKE_COLOR, STROKE_SIZE

logger = logging.getLogger("watermark_app")

STYLE_FIELDS = [
    # (key, label, validator)
    (FONT_COLOR, "文字颜色 / Font Color", validate_color),
    (FONT_SIZE, "字号 px / Font Size", validate_number),
    (STROKE_COLOR, "描边颜色 / Stroke Color", validate_color),
    (STROKE_SIZE, "描边宽度 px / Stroke Size", validate_number),
]


# ---------------------------- Streamlit UI ---------------------------- #
def init_session_state():  # idempotent
    if "ctx" not in st.session_state:
        st.session_state.ctx = WatermarkContext()
    if "images" not in st.session_state:
        st.session_state.images = []  # List[Dict{name, data(bytes)}]
    if "style_valid" not in st.session_state:
        st.session_state.style_valid = True
    if "isolate_failures" not in st.session_state:
        st.session_state.isolate_failures = False
    # Preview surface is rebuilt whenever the first selected file changes
    if "_preview" not in st.session_state:
        st.session_state._preview = None
    if "_preview_sig" not in st.session_state:
        st.session_state._preview_sig = None
    # Bumped after each committed drag so the canvas reloads its object at (0, 0)
    if "_canvas_rev" not in st.session_state:
        st.session_state._canvas_rev = 0
    if "_zip_export_bytes" not in st.session_state:
        st.session_state._zip_export_bytes = None
    if "_export_sig" not in st.session_state:
        st.session_state._export_sig = None
    style = st.session_state.ctx.style
    defaults = {
        FONT_COLOR: style.font_color,
        FONT_SIZE: f"{style.font_size_px:g}",
        STROKE_COLOR: style.stroke_color,
        STROKE_SIZE: f"{style.stroke_width_px:g}",
        "watermark_text": st.session_state.ctx.text,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def notify_user(message: str):
    """Short-lived, non-blocking notice in the corner."""
    st.toast(message, icon="⚠️")


def sidebar_import_panel():
    st.sidebar.header("1. 导入图片 / Import")
    uploaded = st.sidebar.file_uploader(
        "选择或拖拽多张图片",
        type=[e[1:] for e in sorted(config.SUPPORTED_IMPORT_EXTS)],
        accept_multiple_files=True,
    )
    st.session_state.images = [
        {"name": uf.name, "data": uf.getvalue()} for uf in (uploaded or [])
    ]
    if st.session_state.images:
        st.sidebar.success(f"已选择 {len(st.session_state.images)} 张图片")
    else:
        st.sidebar.info("尚未导入图片")


def sidebar_style_panel() -> bool:
    """Render the four style fields; flag bad ones and merge valid values."""
    st.sidebar.header("2. 文本样式 / Style")
    for key, label, check in STYLE_FIELDS:
        st.sidebar.text_input(label, key=key)
        _, ok = check(st.session_state[key])
        if not ok:
            st.sidebar.error(f"无效的值 / Invalid value: {st.session_state[key]!r}")
    try:
        fields = validate_configuration(*(st.session_state[key] for key, _, _ in STYLE_FIELDS))
    except ValidationError as e:
        # size <= 0 and stroke < 0 parse as numbers but still fail here
        checks = {key: check for key, _, check in STYLE_FIELDS}
        for name in e.invalid_fields:
            _, ok = checks[name](st.session_state[name])
            if ok:
                st.sidebar.error(f"{name}: 超出范围 / Out of range")
        st.session_state.style_valid = False
        return False
    st.session_state.ctx.style.apply(fields)
    st.session_state.style_valid = True
    return True


def sidebar_export_settings():
    st.sidebar.header("3. 导出 / Export")
    st.sidebar.checkbox(
        "跳过无法处理的图片 / Skip Bad Files",
        key="isolate_failures",
        help="开启后，损坏或不支持的图片会被跳过，其余图片照常打包。",
    )
    # an archive built from other files, text or style must not be offered
    sig = _export_sig()
    if st.session_state._export_sig != sig:
        st.session_state._zip_export_bytes = None
        st.session_state._export_sig = sig
    if st.sidebar.button("打包ZIP(浏览器下载)"):
        st.session_state._zip_export_bytes = export_zip()
    if st.session_state.get("_zip_export_bytes"):
        st.sidebar.download_button(
            "下载ZIP",
            data=st.session_state._zip_export_bytes,
            file_name=config.ARCHIVE_NAME,
            mime=config.ARCHIVE_MIME,
        )


def _export_sig() -> int:
    ctx: WatermarkContext = st.session_state.ctx
    return hash(
        (
            _selection_sig(st.session_state.images),
            _appearance_sig(ctx),
            ctx.preview_size,
            st.session_state.isolate_failures,
        )
    )


def export_zip() -> Optional[bytes]:
    files = [UploadedFile(img["name"], img["data"]) for img in st.session_state.images]
    if not files:
        notify_user("請選擇檔案 / No file selected")
        return None
    if not st.session_state.style_valid:
        st.sidebar.error("请先修正样式设置 / Fix the style fields first")
        return None
    ctx: WatermarkContext = st.session_state.ctx
    if ctx.preview_size is None:
        st.sidebar.error("没有可用的预览 / No preview to place the watermark from")
        return None
    try:
        if st.session_state.isolate_failures:
            report = asyncio.run(export_report(files, ctx))
            for name, reason in report.failed.items():
                st.sidebar.warning(f"已跳过 {name}: {reason}")
            if not report.succeeded:
                st.sidebar.error("没有图片导出成功")
                return None
            return report.archive_bytes
        return asyncio.run(export_all(files, ctx))
    except WatermarkError as e:
        logger.exception("Export failed")
        st.sidebar.error(f"导出失败 / Export failed: {e}")
        return None


def _selection_sig(images: List[Dict]) -> tuple:
    return tuple((img["name"], len(img["data"]), hash(img["data"])) for img in images)


def ensure_preview(images: List[Dict]) -> Optional[PreviewSurface]:
    """Preview the first selected file that decodes."""
    sig = _selection_sig(images)
    if st.session_state._preview_sig != sig:
        files = [UploadedFile(img["name"], img["data"]) for img in images]
        source = asyncio.run(load_first_decodable(files))
        if source is None:
            st.error("预览失败 / Preview failed: 没有可解码的图片 (no decodable image)")
            st.session_state._preview = None
            st.session_state._preview_sig = None
            return None
        if source.filename != images[0]["name"]:
            st.warning(f"无法解码 {images[0]['name']}，改用 {source.filename} 预览")
        st.session_state._preview = PreviewSurface.from_image(source.image)
        st.session_state._preview_sig = sig
        st.session_state._canvas_rev += 1
    return st.session_state._preview


def _text_object(surface: PreviewSurface) -> Dict:
    b64_data = base64.b64encode(surface.text_layer_png()).decode()
    w, h = surface.size
    return {
        "type": "image",
        "left": 0,
        "top": 0,
        "width": w,
        "height": h,
        "angle": 0,
        "scaleX": 1,
        "scaleY": 1,
        "originX": "left",
        "originY": "top",
        "src": f"data:image/png;base64,{b64_data}",
    }


def _appearance_sig(ctx: WatermarkContext) -> int:
    s = ctx.style
    return hash(
        (ctx.text, s.anchor_point, s.font_size_px, s.font_color, s.stroke_width_px, s.stroke_color)
    )


def main_layout():
    st.title("🖋 Batch Text Watermark")
    st.caption("批量文字水印 / Batch Text Watermark Tool (Streamlit)")
    ctx: WatermarkContext = st.session_state.ctx
    st.text_area("水印文字 / Watermark (可多行)", key="watermark_text", height=100)
    ctx.text = st.session_state.watermark_text
    if not st.session_state.images:
        ctx.preview_size = None
        st.info("请在左侧导入图片 / Use the sidebar to import images")
        return
    surface = ensure_preview(st.session_state.images)
    if surface is None:
        # never export against the size of an earlier selection
        ctx.preview_size = None
        return
    ctx.preview_size = surface.size
    if st.session_state.style_valid:
        surface.redraw(ctx)

    st.subheader("预览 / Preview (拖动文字调整位置)")
    w, h = surface.size
    canvas_result = st_canvas(
        background_image=surface.image_layer,
        height=int(h),
        width=int(w),
        drawing_mode="transform",
        initial_drawing={"version": "4.4.0", "objects": [_text_object(surface)]},
        key=f"wm_drag_canvas_{st.session_state._canvas_rev}_{_appearance_sig(ctx)}",
        update_streamlit=True,
    )

    # The canvas reports the text layer's displacement once the mouse is released;
    # replay it as a down/move/up sequence starting from the layer's origin.
    if canvas_result.json_data is not None:
        objs = canvas_result.json_data.get("objects", [])
        if objs:
            dx = objs[-1].get("left", 0) or 0
            dy = objs[-1].get("top", 0) or 0
            if dx or dy:
                controller = DragController(
                    ctx.style,
                    validate=lambda: st.session_state.style_valid,
                    redraw=lambda _style: surface.redraw(ctx, use_live=True),
                )
                if controller.pointer_down((0, 0)):
                    controller.pointer_move((dx, dy))
                    controller.pointer_up()
                else:
                    notify_user("请先修正样式设置 / Fix the style fields first")
                st.session_state._canvas_rev += 1
                st.rerun()

    ax, ay = ctx.style.anchor_point
    st.markdown(
        f"**当前位置 / Position(px):** ({int(ax)}, {int(ay)})  (画布: {int(w)}x{int(h)})"
    )
    if len(st.session_state.images) > 1:
        st.caption(
            f"其余 {len(st.session_state.images) - 1} 张图片将按相同比例位置加水印"
        )


def run_app():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    st.set_page_config(page_title="Batch Text Watermark", layout="centered")
    init_session_state()
    # Sidebar
    sidebar_import_panel()
    sidebar_style_panel()
    # Main layout sets the watermark text and preview size the export reads
    main_layout()
    sidebar_export_settings()


if __name__ == "__main__":
    # Allow running via `streamlit run watermark_app.py`
    run_app()
