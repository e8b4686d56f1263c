"""
どこで: `chromadepth.util.color`。
何を: 色指定の正規化/変換（Hex, RGBA 0–1, RGBA 0–255）と色相角の算出を一元化。
なぜ: 背景色/ランプのキーフレーム/テストで同一の受理仕様とエラーメッセージを提供するため。
"""

from __future__ import annotations

import colorsys
from typing import Sequence


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def parse_hex_color_str(s: str) -> tuple[float, float, float, float]:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        r = int(t[0:2], 16)
        g = int(t[2:4], 16)
        b = int(t[4:6], 16)
        a = int(t[6:8], 16) if len(t) == 8 else 255
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def _as_sequence(value: object) -> Sequence[float | int] | None:
    if isinstance(value, (list, tuple)):
        return value  # type: ignore[return-value]
    return None


def normalize_color(value: object) -> tuple[float, float, float, float]:
    """色を RGBA(0–1) へ正規化する。

    - 受理: Hex 文字列, 整数 0xRRGGBB, (r,g,b[,a]) （0–1 または 0–255）
    - 返値: (r,g,b,a) （0–1）
    """
    if isinstance(value, str):
        return parse_hex_color_str(value)
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value <= 0xFFFFFF:
            raise ValueError(f"integer color out of range: {value!r}")
        return parse_hex_color_str(f"{value:06x}")
    seq = _as_sequence(value)
    if seq is None:
        raise ValueError(f"unsupported color type: {type(value)!r}")
    if len(seq) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        fseq = [float(v) for v in seq]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    r, g, b = fseq[0], fseq[1], fseq[2]
    a = fseq[3] if len(fseq) == 4 else None
    # まず 0–1 とみなせるか（全要素が 0..1）
    if all(0.0 <= x <= 1.0 for x in (r, g, b)) and (a is None or 0.0 <= a <= 1.0):
        return (_clamp01(r), _clamp01(g), _clamp01(b), 1.0 if a is None else _clamp01(a))
    # 次に 0–255 とみなし、整数丸め → 0–1 へスケール
    u8 = [max(0, min(255, int(round(x)))) for x in (r, g, b)]
    ua = 255 if a is None else max(0, min(255, int(round(a))))
    return (u8[0] / 255.0, u8[1] / 255.0, u8[2] / 255.0, ua / 255.0)


def to_u8_rgba(value: object) -> tuple[int, int, int, int]:
    """色を RGBA(0–255) へ変換する。"""
    r, g, b, a = normalize_color(value)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), int(round(a * 255)))


def to_u8_rgb(value: object) -> tuple[int, int, int]:
    """色を RGB(0–255) へ変換する。"""
    r, g, b, _ = to_u8_rgba(value)
    return (r, g, b)


def rgb_to_hsv_degrees(rgb: Sequence[int]) -> tuple[float, float, float]:
    """RGB(0–255) を (色相角[度], 彩度 0–1, 明度 0–1) へ変換する。"""
    h, s, v = colorsys.rgb_to_hsv(rgb[0] / 255.0, rgb[1] / 255.0, rgb[2] / 255.0)
    return (h * 360.0, s, v)


def hue_degrees(rgb: Sequence[int]) -> float:
    """RGB(0–255) の色相角（度, 0 以上 360 未満）を返す。無彩色は 0.0。"""
    return rgb_to_hsv_degrees(rgb)[0]


__all__ = [
    "parse_hex_color_str",
    "normalize_color",
    "to_u8_rgba",
    "to_u8_rgb",
    "hue_degrees",
    "rgb_to_hsv_degrees",
]
