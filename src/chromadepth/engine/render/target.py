"""
どこで: `chromadepth.engine.render.target`。
何を: オフスクリーン描画先の最小インターフェイス `OffscreenTarget` と moderngl 実装。
なぜ: 深度キャプチャを GL コンテキストから切り離し（確保/使用/読み戻し/解放の 4 操作のみ）、
      合成・ランプをコンテキスト無しでテスト可能に保つため。

読み戻しは RGBA 8bit、行は左上原点へ並べ替えて返す。
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol

import numpy as np

logger = logging.getLogger(__name__)


class OffscreenTarget(Protocol):
    width: int
    height: int

    def allocate(self) -> None: ...

    def use(self) -> None: ...

    def read(self) -> bytes: ...

    def release(self) -> None: ...


class FramebufferTarget:
    """`ctx.simple_framebuffer`（RGBA8 + 深度）による描画先。

    `release()` はビューポートと既定フレームバッファを確保前の状態へ戻してから FBO を解放する。
    """

    channels = 4

    def __init__(self, mgl_context: Any, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("出力解像度が不正です（width/height <= 0）")
        self.ctx = mgl_context
        self.width = int(width)
        self.height = int(height)
        self._fbo: Any = None
        self._old_viewport: Any = None

    def allocate(self) -> None:
        self._old_viewport = self.ctx.viewport
        self._fbo = self.ctx.simple_framebuffer((self.width, self.height), components=4)

    def use(self) -> None:
        if self._fbo is None:
            raise RuntimeError("FramebufferTarget.use() before allocate()")
        self._fbo.use()
        self.ctx.viewport = (0, 0, self.width, self.height)

    def read(self) -> bytes:
        if self._fbo is None:
            raise RuntimeError("FramebufferTarget.read() before allocate()")
        raw = self._fbo.read(components=4, alignment=1)
        # GL は左下原点 → 行を反転して左上原点へ
        px = np.frombuffer(raw, dtype=np.uint8).reshape(self.height, self.width, 4)
        return np.ascontiguousarray(px[::-1]).tobytes()

    def release(self) -> None:
        # 後片付け（ビューポートと既定FBOへ戻す）。解放失敗は後続を止めない。
        try:
            if self._old_viewport is not None:
                self.ctx.viewport = self._old_viewport
            screen = getattr(self.ctx, "screen", None)
            if screen is not None:
                screen.use()
        except Exception as e:
            logger.warning("既定フレームバッファへの復帰に失敗: %s", e)
        if self._fbo is not None:
            try:
                self._fbo.release()
            except Exception as e:
                logger.warning("FBO の解放に失敗: %s", e)
            self._fbo = None


def framebuffer_target_factory(mgl_context: Any) -> Callable[[int, int], FramebufferTarget]:
    """`DepthCapture` 用のターゲット生成関数を返す。"""

    def _factory(width: int, height: int) -> FramebufferTarget:
        return FramebufferTarget(mgl_context, width, height)

    return _factory


__all__ = ["FramebufferTarget", "OffscreenTarget", "framebuffer_target_factory"]
