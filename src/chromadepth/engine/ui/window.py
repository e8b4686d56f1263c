"""
どこで: `chromadepth.engine.ui.window`。
何を: `ChromadepthImage` を 2D 画素バッファとして貼り付けて表示する Pyglet Window。

使用例:
    win = ChromadepthWindow(image)
    pyglet.app.run()
"""

from __future__ import annotations

import numpy as np
import pyglet

from ..core.buffers import ChromadepthImage


def to_pyglet_image(image: ChromadepthImage) -> "pyglet.image.ImageData":
    """左上原点の RGBA を pyglet（左下原点）の ImageData へ変換する。"""
    data = np.ascontiguousarray(image.rgba[::-1]).tobytes()
    return pyglet.image.ImageData(image.width, image.height, "RGBA", data, pitch=image.width * 4)


class ChromadepthWindow(pyglet.window.Window):
    def __init__(
        self,
        image: ChromadepthImage,
        *,
        caption: str = "Chromadepth",
        bg_color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0),
    ):
        """画像と同じ解像度のウィンドウを生成する。

        引数:
            image: 表示する画像。
            caption: ウィンドウタイトル。
            bg_color: 背景色 RGBA（0.0〜1.0）。
        """
        super().__init__(width=image.width, height=image.height, caption=caption)
        self._bg_color = bg_color
        self._sprite_image = to_pyglet_image(image)

    def set_image(self, image: ChromadepthImage) -> None:
        """表示中の画像を差し替え、ウィンドウサイズを合わせる。"""
        self._sprite_image = to_pyglet_image(image)
        self.set_size(image.width, image.height)

    def on_draw(self):  # Pyglet 既定のイベント名
        from pyglet.gl import glClearColor

        r, g, b, a = self._bg_color
        glClearColor(r, g, b, a)
        self.clear()
        self._sprite_image.blit(0, 0)


def show_image(image: ChromadepthImage, *, run: bool = True) -> ChromadepthWindow:
    """ウィンドウを開いて画像を表示する。`run=True` ならイベントループを開始する。"""
    window = ChromadepthWindow(image)
    if run:
        pyglet.app.run()
    return window


__all__ = ["ChromadepthWindow", "show_image", "to_pyglet_image"]
