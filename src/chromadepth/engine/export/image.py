"""
どこで: `chromadepth.engine.export.image`。
何を: `ChromadepthImage`（RGBA）と `DepthBuffer` の深度チャンネル（8bit 輝度）を PNG として保存する。
なぜ: 固定パラメータで書き出し、同じ入力から同じバイト列を得られるようにするため。
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from ...util.paths import ensure_export_dir, unique_path
from ..core.buffers import ChromadepthImage, DepthBuffer

logger = logging.getLogger(__name__)

CHROMADEPTH_FILENAME = "chromadepth-visualization.png"
DEPTH_MAP_FILENAME = "depth-map.png"


def _resolve_path(path: str | Path | None, default_name: str, overwrite: bool) -> Path:
    """出力先を決める。

    - None: 既定の `data/export/` に `default_name`
    - 既存ディレクトリ: その中に `default_name`
    - それ以外: ファイルパスとして扱い、親ディレクトリを作成
    - `overwrite=False` なら既存ファイルを避けて連番を付ける
    """
    if path is None:
        out = ensure_export_dir() / default_name
    else:
        out = Path(path)
        if out.is_dir():
            out = out / default_name
        else:
            out.parent.mkdir(parents=True, exist_ok=True)
    return out if overwrite else unique_path(out)


def _write_png(arr: np.ndarray, path: Path) -> None:
    try:
        img = Image.fromarray(np.ascontiguousarray(arr))
        # optimize 無効 + 圧縮レベル固定で決定的なバイト列にする
        img.save(path, format="PNG", optimize=False, compress_level=6)
    except (OSError, ValueError) as e:
        raise RuntimeError(f"PNG 書き出しに失敗: {e}") from e


def save_chromadepth_png(
    image: ChromadepthImage, path: str | Path | None = None, *, overwrite: bool = False
) -> Path:
    """クロマデプス画像を RGBA PNG として保存し、保存先を返す。"""
    out = _resolve_path(path, CHROMADEPTH_FILENAME, overwrite)
    _write_png(image.rgba, out)
    logger.info("saved chromadepth image: %s (%dx%d)", out, image.width, image.height)
    return out


def save_depth_map_png(
    buffer: DepthBuffer, path: str | Path | None = None, *, overwrite: bool = False
) -> Path:
    """深度チャンネルをそのまま 8bit グレースケール PNG として保存し、保存先を返す。"""
    out = _resolve_path(path, DEPTH_MAP_FILENAME, overwrite)
    _write_png(buffer.to_grayscale(), out)
    logger.info("saved depth map: %s (%dx%d)", out, buffer.width, buffer.height)
    return out


__all__ = [
    "CHROMADEPTH_FILENAME",
    "DEPTH_MAP_FILENAME",
    "save_chromadepth_png",
    "save_depth_map_png",
]
