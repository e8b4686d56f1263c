"""
どこで: `chromadepth.engine.core.ramp`。
何を: 8bit 深度サンプル（0–255）をクロマデプス規約のスペクトル色 RGB へ写像する純関数 `ColorRamp`。
なぜ: 手前=暖色/奥=寒色の色相順だけで深度の順序を復元できる可視化を、決定的に提供するため。

キーフレーム（HSV 色相角, S=1, V=1）:
    t=0/270   赤     (255,   0,   0)    0°
    t=60/270  黄     (255, 255,   0)   60°
    t=120/270 緑     (  0, 255,   0)  120°
    t=180/270 シアン (  0, 255, 255)  180°
    t=240/270 青     (  0,   0, 255)  240°
    t=1       紫     (128,   0, 255)  270°

隣接キーフレームは同じ 60° 区間に収まるため、RGB 線形補間で変化するチャンネルは常に 1 つだけ。
彩度/明度は一定のまま、色相が t に対して線形になる。
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from typing import Any, Mapping, Sequence

import numpy as np

from ...common.settings import POLARITIES
from ...util.color import hue_degrees, rgb_to_hsv_degrees, to_u8_rgb

RGB = tuple[int, int, int]
Keyframe = tuple[float, RGB]

logger = logging.getLogger(__name__)

CHROMADEPTH_KEYFRAMES: tuple[Keyframe, ...] = (
    (0.0, (255, 0, 0)),
    (60.0 / 270.0, (255, 255, 0)),
    (120.0 / 270.0, (0, 255, 0)),
    (180.0 / 270.0, (0, 255, 255)),
    (240.0 / 270.0, (0, 0, 255)),
    (1.0, (128, 0, 255)),
)


def _validate_keyframes(keyframes: Sequence[tuple[float, object]]) -> tuple[Keyframe, ...]:
    if len(keyframes) < 2:
        raise ValueError("ColorRamp needs at least two keyframes")
    stops: list[Keyframe] = []
    for pos, color in keyframes:
        stops.append((float(pos), to_u8_rgb(color)))
    positions = [p for p, _ in stops]
    if positions[0] != 0.0 or positions[-1] != 1.0:
        raise ValueError("keyframe positions must start at 0.0 and end at 1.0")
    if any(b <= a for a, b in zip(positions, positions[1:])):
        raise ValueError("keyframe positions must be strictly increasing")
    hsv = [rgb_to_hsv_degrees(c) for _, c in stops]
    if any(s <= 0.0 or v <= 0.0 for _, s, v in hsv):
        raise ValueError("keyframe colors must be chromatic (saturation > 0 and value > 0)")
    hues = np.asarray([h for h, _, _ in hsv], dtype=np.float64)
    steps = np.diff(hues)
    if not (np.all(steps > 0.0) or np.all(steps < 0.0)):
        raise ValueError("keyframe hues must be strictly monotonic")
    return tuple(stops)


def _is_monotonic(values: Sequence[float]) -> bool:
    diffs = np.diff(np.asarray(values, dtype=np.float64))
    return bool(np.all(diffs >= -1e-9) or np.all(diffs <= 1e-9))


class ColorRamp:
    """深度サンプル → RGB のスペクトルランプ。

    Parameters
    ----------
    keyframes : Sequence[(float, color)] | None
        位置 0..1 と色の組。None で `CHROMADEPTH_KEYFRAMES`（赤→紫）。
        色は `util.color.to_u8_rgb` が受理する任意の形式。
    polarity : str
        "near_warm"（既定: 深度 0 が赤）または "near_cool"（反転: 深度 0 が紫）。
    """

    def __init__(
        self,
        keyframes: Sequence[tuple[float, object]] | None = None,
        *,
        polarity: str = "near_warm",
    ) -> None:
        if polarity not in POLARITIES:
            raise ValueError(f"unknown polarity: {polarity!r} (expected one of {POLARITIES})")
        custom = keyframes is not None
        stops = _validate_keyframes(keyframes) if custom else CHROMADEPTH_KEYFRAMES  # type: ignore[arg-type]
        if polarity == "near_cool":
            stops = tuple((1.0 - p, c) for p, c in reversed(stops))
        self.polarity = polarity
        self._positions: tuple[float, ...] = tuple(p for p, _ in stops)
        self._colors: tuple[RGB, ...] = tuple(c for _, c in stops)
        self._lut: np.ndarray | None = None
        if custom and not _is_monotonic([hue_degrees(c) for c in self.lut()]):
            raise ValueError("keyframes must produce a hue that is monotonic in depth")

    @property
    def keyframes(self) -> tuple[Keyframe, ...]:
        return tuple(zip(self._positions, self._colors))

    @property
    def near_color(self) -> RGB:
        """深度 0 の色（ランプの始端）。"""
        return self._colors[0]

    @property
    def far_color(self) -> RGB:
        """深度 255 の色（ランプの終端）。"""
        return self._colors[-1]

    def map(self, depth: int) -> RGB:
        """深度サンプル（0–255）を RGB(0–255) へ写像する。

        範囲外の入力は端の色に張り付く（キーフレーム外へは外挿しない）。
        """
        t = float(depth) / 255.0
        positions = self._positions
        colors = self._colors
        if t <= positions[0]:
            return colors[0]
        if t >= positions[-1]:
            return colors[-1]
        i = bisect_right(positions, t) - 1
        p0, p1 = positions[i], positions[i + 1]
        c0, c1 = colors[i], colors[i + 1]
        f = (t - p0) / (p1 - p0)
        # 補間値は c0..c1 の間（非負）なので +0.5 の切り捨てで四捨五入
        return (
            int(c0[0] + (c1[0] - c0[0]) * f + 0.5),
            int(c0[1] + (c1[1] - c0[1]) * f + 0.5),
            int(c0[2] + (c1[2] - c0[2]) * f + 0.5),
        )

    def lut(self) -> np.ndarray:
        """全 256 サンプル分の写像表 `(256, 3) uint8`（読み取り専用, 初回のみ構築）。"""
        if self._lut is None:
            table = np.array([self.map(d) for d in range(256)], dtype=np.uint8)
            table.flags.writeable = False
            self._lut = table
        return self._lut

    def hue_of(self, depth: int) -> float:
        """`map(depth)` の色相角（度）。"""
        return hue_degrees(self.map(depth))

    @classmethod
    def from_config(
        cls, section: Mapping[str, Any] | None, *, polarity: str | None = None
    ) -> "ColorRamp":
        """YAML の `ramp:` セクションからランプを構築する。

        - `polarity` 引数（環境変数由来）が YAML の値より優先。
        - `keyframes` は `[{at: 0.0, color: "#ff0000"}, ...]` 形式。
        """
        section = section or {}
        pol = polarity or str(section.get("polarity", "near_warm")).strip().lower()
        raw = section.get("keyframes")
        keyframes = None
        if raw:
            try:
                keyframes = [(item["at"], item["color"]) for item in raw]
            except (KeyError, TypeError) as e:
                raise ValueError(f"invalid ramp keyframes in config: {raw!r}") from e
        logger.debug("ColorRamp from config: polarity=%s custom=%s", pol, keyframes is not None)
        return cls(keyframes, polarity=pol)

    def __repr__(self) -> str:
        return f"ColorRamp(polarity={self.polarity!r}, stops={len(self._positions)})"


__all__ = ["CHROMADEPTH_KEYFRAMES", "ColorRamp", "RGB"]
