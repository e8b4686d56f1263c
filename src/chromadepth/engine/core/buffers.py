"""
どこで: `chromadepth.engine.core.buffers`。
何を: 読み戻した深度画素列 `DepthBuffer` と、合成結果 `ChromadepthImage` の値型。
なぜ: キャプチャ→合成→表示/出力の受け渡しで、形状不変条件と不変性を型で保証するため。

どちらも行優先・左上原点。`DepthBuffer` は深度チャンネル（先頭=R）以外も
バイト配置のまま保持するが、本パッケージでは参照しない。
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

DEPTH_CHANNEL = 0
BACKGROUND_DEPTH = 255


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class DepthBuffer:
    """width × height × channels の uint8 画素列（1 回のキャプチャにつき 1 つ）。

    `data` は平坦な読み取り専用配列。長さは常に `width * height * channels`。
    """

    width: int
    height: int
    data: np.ndarray = field(repr=False)
    channels: int = 4

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"DepthBuffer size must be positive: {self.width}x{self.height}")
        if self.channels < 1:
            raise ValueError("DepthBuffer needs at least one channel")
        arr = np.asarray(self.data)
        if arr.dtype != np.uint8:
            raise ValueError(f"DepthBuffer data must be uint8, got {arr.dtype}")
        flat = np.array(arr, dtype=np.uint8, copy=True).reshape(-1)
        expected = self.width * self.height * self.channels
        if flat.size != expected:
            raise ValueError(
                f"DepthBuffer length {flat.size} != {self.width}*{self.height}*{self.channels}"
            )
        object.__setattr__(self, "data", _readonly(flat))

    @classmethod
    def from_bytes(cls, raw: bytes, width: int, height: int, channels: int = 4) -> "DepthBuffer":
        return cls(width, height, np.frombuffer(raw, dtype=np.uint8), channels)

    @classmethod
    def uniform(
        cls, width: int, height: int, depth: int = BACKGROUND_DEPTH, channels: int = 4
    ) -> "DepthBuffer":
        """全画素が同じ深度のバッファ（深度以外のチャンネルは 255）。"""
        px = np.full((height, width, channels), 255, dtype=np.uint8)
        px[..., DEPTH_CHANNEL] = depth
        return cls(width, height, px, channels)

    @property
    def pixels(self) -> np.ndarray:
        """`(height, width, channels)` ビュー。"""
        return self.data.reshape(self.height, self.width, self.channels)

    @property
    def depth(self) -> np.ndarray:
        """深度チャンネルの `(height, width)` ビュー。"""
        return self.pixels[..., DEPTH_CHANNEL]

    def tobytes(self) -> bytes:
        return self.data.tobytes()

    def to_grayscale(self) -> np.ndarray:
        """深度チャンネルを 8bit 輝度画像 `(height, width)` として複製する。"""
        return np.ascontiguousarray(self.depth)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DepthBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.channels == other.channels
            and bool(np.array_equal(self.data, other.data))
        )

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True, eq=False)
class ChromadepthImage:
    """`(height, width, 4)` uint8 の RGBA 画像（α は常に 255）。"""

    width: int
    height: int
    rgba: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        arr = np.asarray(self.rgba)
        if arr.dtype != np.uint8 or arr.shape != (self.height, self.width, 4):
            raise ValueError(
                f"ChromadepthImage expects uint8 ({self.height}, {self.width}, 4), "
                f"got {arr.dtype} {arr.shape}"
            )
        object.__setattr__(self, "rgba", _readonly(np.ascontiguousarray(arr)))

    @property
    def rgb(self) -> np.ndarray:
        return self.rgba[..., :3]

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """左上原点 (x, y) の RGB。"""
        r, g, b = self.rgba[y, x, :3]
        return (int(r), int(g), int(b))

    def tobytes(self) -> bytes:
        return self.rgba.tobytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChromadepthImage):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and bool(np.array_equal(self.rgba, other.rgba))
        )

    __hash__ = None  # type: ignore[assignment]


__all__ = ["BACKGROUND_DEPTH", "DEPTH_CHANNEL", "ChromadepthImage", "DepthBuffer"]
