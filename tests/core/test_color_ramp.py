from __future__ import annotations

import colorsys

import numpy as np
import pytest

from chromadepth.engine.core.ramp import CHROMADEPTH_KEYFRAMES, ColorRamp


def _hues(ramp: ColorRamp) -> list[float]:
    return [ramp.hue_of(d) for d in range(256)]


def test_extremes_are_exact_keyframes() -> None:
    ramp = ColorRamp()
    assert ramp.map(0) == (255, 0, 0)
    assert ramp.map(255) == (128, 0, 255)
    assert ramp.near_color == CHROMADEPTH_KEYFRAMES[0][1]
    assert ramp.far_color == CHROMADEPTH_KEYFRAMES[-1][1]


def test_all_channels_in_byte_range() -> None:
    ramp = ColorRamp()
    for d in range(256):
        rgb = ramp.map(d)
        assert len(rgb) == 3
        assert all(isinstance(c, int) and 0 <= c <= 255 for c in rgb)


def test_hue_is_monotonic_near_warm() -> None:
    hues = _hues(ColorRamp())
    assert all(b >= a for a, b in zip(hues, hues[1:]))
    # 赤(0°) から紫(≈270°) まで広がる
    assert hues[0] == pytest.approx(0.0)
    assert hues[-1] == pytest.approx(270.0, abs=0.5)


def test_hue_is_monotonic_near_cool() -> None:
    ramp = ColorRamp(polarity="near_cool")
    assert ramp.map(0) == (128, 0, 255)
    assert ramp.map(255) == (255, 0, 0)
    hues = _hues(ramp)
    assert all(b <= a for a, b in zip(hues, hues[1:]))


def test_saturation_and_value_constant_across_ramp() -> None:
    ramp = ColorRamp()
    for d in range(256):
        r, g, b = ramp.map(d)
        _, s, v = colorsys.rgb_to_hsv(r / 255.0, g / 255.0, b / 255.0)
        assert s == pytest.approx(1.0)
        assert v == pytest.approx(1.0)


def test_map_is_pure_and_matches_lut() -> None:
    ramp = ColorRamp()
    lut = ramp.lut()
    assert lut.shape == (256, 3) and lut.dtype == np.uint8
    assert not lut.flags.writeable
    for d in (0, 1, 17, 128, 254, 255):
        assert ramp.map(d) == ramp.map(d)
        assert tuple(int(c) for c in lut[d]) == ramp.map(d)
    # キャッシュされる
    assert ramp.lut() is lut


def test_out_of_range_inputs_saturate_at_ends() -> None:
    ramp = ColorRamp()
    assert ramp.map(-10) == ramp.map(0)
    assert ramp.map(300) == ramp.map(255)


def test_custom_two_stop_ramp_interpolates_linearly() -> None:
    ramp = ColorRamp([(0.0, "#ff0000"), (1.0, "#ffff00")])
    assert ramp.map(0) == (255, 0, 0)
    assert ramp.map(255) == (255, 255, 0)
    assert ramp.map(51) == (255, 51, 0)


def test_custom_keyframes_with_hue_reversal_are_rejected() -> None:
    # 赤→青の RGB 補間はマゼンタ（300°）を経由し、色相が単調にならない
    with pytest.raises(ValueError):
        ColorRamp([(0.0, "#ff0000"), (1.0, "#0000ff")])


@pytest.mark.parametrize(
    "keyframes",
    [
        # 無彩色（彩度 0）: 全サンプルが同じ色相になり深度順が失われる
        [(0.0, "#000000"), (1.0, "#ffffff")],
        [(0.0, "#404040"), (1.0, "#c0c0c0")],
        # 色相一定（明度だけが変わる）
        [(0.0, "#ff0000"), (1.0, "#800000")],
        # 途中で色相が戻る
        [(0.0, "#ff0000"), (0.5, "#ffff00"), (1.0, "#ff8000")],
    ],
)
def test_keyframes_without_distinct_hues_are_rejected(keyframes) -> None:  # noqa: ANN001
    with pytest.raises(ValueError):
        ColorRamp(keyframes)


def test_accepted_custom_ramp_has_strictly_ordered_keyframe_hues() -> None:
    ramp = ColorRamp([(0.0, "#ff0000"), (0.5, "#ffff00"), (1.0, "#00ff00")])
    assert ramp.hue_of(0) < ramp.hue_of(128) < ramp.hue_of(255)
    assert len({round(ramp.hue_of(d), 6) for d in range(256)}) > 1


@pytest.mark.parametrize(
    "keyframes",
    [
        [(0.0, "#ff0000")],
        [(0.1, "#ff0000"), (1.0, "#ffff00")],
        [(0.0, "#ff0000"), (0.9, "#ffff00")],
        [(0.0, "#ff0000"), (0.5, "#ff8000"), (0.5, "#ffff00"), (1.0, "#00ff00")],
    ],
)
def test_invalid_keyframe_positions(keyframes) -> None:  # noqa: ANN001
    with pytest.raises(ValueError):
        ColorRamp(keyframes)


def test_unknown_polarity() -> None:
    with pytest.raises(ValueError):
        ColorRamp(polarity="sideways")


def test_from_config_reads_polarity_and_keyframes() -> None:
    ramp = ColorRamp.from_config(
        {
            "polarity": "near_cool",
            "keyframes": [{"at": 0.0, "color": "#ff0000"}, {"at": 1.0, "color": "#ffff00"}],
        }
    )
    assert ramp.polarity == "near_cool"
    assert ramp.map(0) == (255, 255, 0)
    assert ramp.map(255) == (255, 0, 0)


def test_from_config_polarity_override_and_defaults() -> None:
    assert ColorRamp.from_config(None).polarity == "near_warm"
    ramp = ColorRamp.from_config({"polarity": "near_warm"}, polarity="near_cool")
    assert ramp.polarity == "near_cool"
    with pytest.raises(ValueError):
        ColorRamp.from_config({"keyframes": [{"position": 0.0}]})
