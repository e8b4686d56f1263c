"""
どこで: `chromadepth.engine.scene` サブパッケージ。
何を: シーングラフ（SceneNode/Mesh/Scene）・透視カメラ・基本形状メッシュ。
なぜ: 深度キャプチャが走査する描画対象と、その見え方（マテリアル/変換）を一箇所で表現するため。
"""

from .camera import PerspectiveCamera
from .graph import DirectionalLight, Mesh, MeshGeometry, Scene, SceneNode, iter_drawables

__all__ = [
    "DirectionalLight",
    "Mesh",
    "MeshGeometry",
    "PerspectiveCamera",
    "Scene",
    "SceneNode",
    "iter_drawables",
]
