"""
どこで: `chromadepth` パッケージ。
何を: 3D シーンの深度バッファを取得し、色相（クロマデプス）に写像して画像化する。
なぜ: 手前/奥の関係を色だけで判別できる可視化を、描画バックエンドから独立に提供するため。
"""

from .common.errors import (
    BackendUnavailable,
    ChromadepthError,
    NoSceneLoaded,
    NothingToExport,
    StateRestorationMismatch,
)
from .engine.capture.depth_capture import DepthCapture
from .engine.compose.compositor import ChromadepthCompositor
from .engine.core.buffers import ChromadepthImage, DepthBuffer
from .engine.core.ramp import ColorRamp

__all__ = [
    "BackendUnavailable",
    "ChromadepthCompositor",
    "ChromadepthError",
    "ChromadepthImage",
    "ColorRamp",
    "DepthBuffer",
    "DepthCapture",
    "NoSceneLoaded",
    "NothingToExport",
    "StateRestorationMismatch",
]
