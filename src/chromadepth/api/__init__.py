"""
どこで: `chromadepth.api` パッケージ。
何を: ビューポート（シーン/カメラ/照明/モデル変換）を束ね、生成・表示・出力を行う窓口。
なぜ: 深度キャプチャ/合成の中核を、対話操作相当の薄い API から利用できるようにするため。
"""

from .viewport import ViewportController

__all__ = ["ViewportController"]
