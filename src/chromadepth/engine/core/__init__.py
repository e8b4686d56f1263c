"""
どこで: `chromadepth.engine.core` サブパッケージ。
何を: ColorRamp・深度/画像バッファ型・行列ユーティリティを提供。
なぜ: 描画バックエンドに依存しない計算基盤を上位層（capture/compose/scene）から再利用するため。
"""

from .buffers import ChromadepthImage, DepthBuffer
from .ramp import CHROMADEPTH_KEYFRAMES, ColorRamp

__all__ = ["CHROMADEPTH_KEYFRAMES", "ChromadepthImage", "ColorRamp", "DepthBuffer"]
