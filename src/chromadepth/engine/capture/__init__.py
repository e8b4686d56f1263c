"""
どこで: `chromadepth.engine.capture` サブパッケージ。
何を: 深度のみの描画パス（マテリアル置換 → オフスクリーン描画 → 読み戻し → 復元）。
なぜ: 対話表示中のシーン状態を壊さずに 1 回分の深度バッファを取り出すため。
"""

from .depth_capture import DepthCapture, scene_capture_lock, substituted_materials

__all__ = ["DepthCapture", "scene_capture_lock", "substituted_materials"]
