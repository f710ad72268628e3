from PIL import Image

from batch_watermark import PreviewSurface, Size, WatermarkContext, WatermarkStyle


def test_preview_fits_wide_images_to_450px():
    surface = PreviewSurface.from_image(Image.new("RGB", (1800, 1200), "white"))
    assert surface.size == Size(450, 300)
    assert surface.text_layer.size == surface.image_layer.size
    assert surface.text_layer.getbbox() is None


def test_preview_keeps_small_images():
    surface = PreviewSurface.from_image(Image.new("RGB", (300, 200), "white"))
    assert surface.size == Size(300, 200)


def test_redraw_uses_live_point_while_dragging():
    surface = PreviewSurface.from_image(Image.new("RGB", (450, 300), "white"))
    style = WatermarkStyle(anchor_point=(40, 60), live_offset_point=(240, 60), stroke_width_px=0)
    ctx = WatermarkContext(style=style, text="H")
    committed_left = surface.redraw(ctx).getbbox()[0]
    live_left = surface.redraw(ctx, use_live=True).getbbox()[0]
    assert live_left - committed_left == 200


def test_flatten_puts_text_over_image():
    surface = PreviewSurface.from_image(Image.new("RGB", (450, 300), "white"))
    ctx = WatermarkContext(style=WatermarkStyle(font_color="#000000", stroke_width_px=0), text="H")
    surface.redraw(ctx)
    flat = surface.flatten()
    assert flat.size == (450, 300)
    assert flat.convert("L").getextrema()[0] < 50
    assert surface.text_layer_png().startswith(b"\x89PNG")
