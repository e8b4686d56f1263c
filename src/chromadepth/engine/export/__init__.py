"""
どこで: `chromadepth.engine.export` サブパッケージ。
何を: クロマデプス画像/生の深度マップの PNG 書き出し。
なぜ: 表示とは独立に、可搬な可逆ラスタとして結果を保存するため。
"""

from .image import (
    CHROMADEPTH_FILENAME,
    DEPTH_MAP_FILENAME,
    save_chromadepth_png,
    save_depth_map_png,
)

__all__ = [
    "CHROMADEPTH_FILENAME",
    "DEPTH_MAP_FILENAME",
    "save_chromadepth_png",
    "save_depth_map_png",
]
