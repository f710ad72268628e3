import pytest

from batch_watermark import ValidationError, validate_color, validate_configuration, validate_number


@pytest.mark.parametrize(
    "text", ["#0066cc", "#fff", "red", "White", "rgb(0, 102, 204)", "rgba(0, 0, 0, 128)", "hsl(120, 100%, 50%)"]
)
def test_validate_color_accepts_css_colors(text):
    assert validate_color(text) == (text, True)


@pytest.mark.parametrize("text", ["banana", "", "   ", "#12", "rgb(1,2)"])
def test_validate_color_rejects_other_text(text):
    assert validate_color(text)[1] is False


@pytest.mark.parametrize("text", ["30", "0", "12.5", "-3", "1e2"])
def test_validate_number_accepts_numbers(text):
    assert validate_number(text) == (text, True)


@pytest.mark.parametrize("text", ["abc", "", "nan", "inf", "1_000", "12px"])
def test_validate_number_rejects_non_numbers(text):
    assert validate_number(text)[1] is False


def test_validate_number_strips_whitespace():
    assert validate_number(" 7 ") == ("7", True)


def test_validate_configuration_returns_parsed_fields():
    fields = validate_configuration("#0066cc", "30", "white", "5")
    assert fields.font_color == "#0066cc"
    assert fields.font_size_px == 30.0
    assert fields.stroke_color == "white"
    assert fields.stroke_width_px == 5.0


def test_validate_configuration_reports_every_invalid_field():
    with pytest.raises(ValidationError) as excinfo:
        validate_configuration("banana", "abc", "#fff", "x")
    assert excinfo.value.invalid_fields == ("font_color", "font_size", "stroke_size")


def test_validate_configuration_enforces_ranges():
    with pytest.raises(ValidationError) as excinfo:
        validate_configuration("red", "0", "red", "-1")
    assert excinfo.value.invalid_fields == ("font_size", "stroke_size")
    # zero stroke is allowed
    assert validate_configuration("red", "12", "red", "0").stroke_width_px == 0.0
