"""
どこで: `chromadepth.engine.compose` サブパッケージ。
何を: 深度バッファ → クロマデプス画像の画素ごとの写像。
なぜ: GL コンテキストを持たない純粋変換として、表示/出力の手前に置くため。
"""

from .compositor import ChromadepthCompositor

__all__ = ["ChromadepthCompositor"]
