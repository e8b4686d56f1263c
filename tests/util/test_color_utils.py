import pytest

from chromadepth.util.color import hue_degrees, normalize_color, to_u8_rgb, to_u8_rgba


@pytest.mark.parametrize(
    "value, expected",
    [
        ("#ff8000", (255, 128, 0, 255)),
        ("0x00ff0080", (0, 255, 0, 128)),
        (0x0000FF, (0, 0, 255, 255)),
        ((1.0, 0.5, 0.0), (255, 128, 0, 255)),
        ((255, 0, 128, 64), (255, 0, 128, 64)),
    ],
)
def test_color_forms(value, expected):
    assert to_u8_rgba(value) == expected


@pytest.mark.parametrize("bad", ["#12345", "#gggggg", (1, 2), object(), 0x1000000, True])
def test_invalid_colors(bad):
    with pytest.raises(ValueError):
        normalize_color(bad)


def test_hue_degrees():
    assert hue_degrees(to_u8_rgb("#ff0000")) == pytest.approx(0.0)
    assert hue_degrees((0, 255, 0)) == pytest.approx(120.0)
    assert hue_degrees((0, 0, 255)) == pytest.approx(240.0)
