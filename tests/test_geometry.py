import pytest

from batch_watermark import Size, fit_preview_size, map_preview_point_to_target


def test_map_preview_point_to_target():
    x, y, scale = map_preview_point_to_target((40, 40), (450, 300), (1800, 1200))
    assert x == pytest.approx(160)
    assert y == pytest.approx(160)
    assert scale == pytest.approx(4)


def test_map_identity_when_sizes_match():
    assert map_preview_point_to_target((12, 34), (450, 300), (450, 300)) == pytest.approx((12, 34, 1))


def test_map_rejects_empty_preview():
    with pytest.raises(ValueError):
        map_preview_point_to_target((1, 1), (0, 300), (100, 100))


def test_fit_preview_size_caps_width():
    assert fit_preview_size((1800, 1200)) == Size(450, 300)
    assert fit_preview_size((900, 900), max_width=300) == Size(300, 300)


def test_fit_preview_size_keeps_small_images():
    assert fit_preview_size((300, 200)) == Size(300, 200)
