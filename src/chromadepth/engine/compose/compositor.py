"""
どこで: `chromadepth.engine.compose.compositor`。
何を: `DepthBuffer` の深度チャンネルへ `ColorRamp` の写像表を適用し、不透明 RGBA の
      `ChromadepthImage` を作る。
なぜ: 画素間に依存の無い写像を、副作用なく決定的に行うため（大きな画像は並列化）。

並列経路（numba `prange`）は画素数がしきい値以上のときのみ使う。結果は numpy 経路と同一。
"""

from __future__ import annotations

import logging

import numpy as np
from numba import njit, prange  # type: ignore[attr-defined]

from ...common.settings import get as _get_settings
from ..core.buffers import ChromadepthImage, DepthBuffer
from ..core.ramp import ColorRamp

logger = logging.getLogger(__name__)

OPAQUE = 255


@njit(parallel=True, cache=True)
def _apply_lut_parallel(depth: np.ndarray, lut: np.ndarray) -> np.ndarray:
    h, w = depth.shape
    out = np.empty((h, w, 4), dtype=np.uint8)
    for y in prange(h):
        for x in range(w):
            d = depth[y, x]
            out[y, x, 0] = lut[d, 0]
            out[y, x, 1] = lut[d, 1]
            out[y, x, 2] = lut[d, 2]
            out[y, x, 3] = 255
    return out


def _apply_lut(depth: np.ndarray, lut: np.ndarray) -> np.ndarray:
    h, w = depth.shape
    out = np.empty((h, w, 4), dtype=np.uint8)
    out[..., :3] = lut[depth]
    out[..., 3] = OPAQUE
    return out


class ChromadepthCompositor:
    """深度バッファを色相画像へ変換する。

    Parameters
    ----------
    ramp : ColorRamp | None
        写像に使うランプ。None で既定（near_warm）。
    parallel : bool | None
        並列経路の可否。None で設定 `PARALLEL_COMPOSITE`。
    parallel_min_pixels : int | None
        並列経路へ切り替える画素数。None で設定 `PARALLEL_MIN_PIXELS`。
    """

    def __init__(
        self,
        ramp: ColorRamp | None = None,
        *,
        parallel: bool | None = None,
        parallel_min_pixels: int | None = None,
    ) -> None:
        settings = _get_settings()
        self.ramp = ramp if ramp is not None else ColorRamp()
        self.parallel = settings.PARALLEL_COMPOSITE if parallel is None else bool(parallel)
        self.parallel_min_pixels = (
            settings.PARALLEL_MIN_PIXELS if parallel_min_pixels is None else int(parallel_min_pixels)
        )

    def _use_parallel(self, pixel_count: int) -> bool:
        return self.parallel and pixel_count >= self.parallel_min_pixels

    def composite(self, buffer: DepthBuffer) -> ChromadepthImage:
        """各画素の深度サンプルを `ramp.map` で色へ置き換える（α=255）。"""
        lut = self.ramp.lut()
        depth = np.ascontiguousarray(buffer.depth)
        if self._use_parallel(depth.size):
            rgba = _apply_lut_parallel(depth, lut)
        else:
            rgba = _apply_lut(depth, lut)
        logger.debug(
            "composited %dx%d (parallel=%s)",
            buffer.width,
            buffer.height,
            self._use_parallel(depth.size),
        )
        return ChromadepthImage(buffer.width, buffer.height, rgba)


__all__ = ["ChromadepthCompositor"]
