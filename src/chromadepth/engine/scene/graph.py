"""
どこで: `chromadepth.engine.scene.graph`。
何を: 変換付きノードの木（SceneNode）と、差し替え可能なマテリアルを持つ描画対象 `Mesh`。
なぜ: 深度キャプチャが決定的な順序（前順・挿入順）で描画対象を走査し、
      マテリアル参照だけを一時的に置換/復元できるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

import numpy as np

from ..core import transform_utils as tu


class MeshGeometry:
    """非インデックスの三角形リスト（頂点ごとの位置/法線, float32）。"""

    def __init__(self, positions: np.ndarray, normals: np.ndarray | None = None) -> None:
        pos = np.ascontiguousarray(positions, dtype=np.float32).reshape(-1, 3)
        if pos.shape[0] % 3 != 0:
            raise ValueError("MeshGeometry expects a triangle list (vertex count % 3 == 0)")
        if normals is None:
            nrm = _flat_normals(pos)
        else:
            nrm = np.ascontiguousarray(normals, dtype=np.float32).reshape(-1, 3)
            if nrm.shape != pos.shape:
                raise ValueError("normals must match positions in shape")
        pos.flags.writeable = False
        nrm.flags.writeable = False
        self.positions = pos
        self.normals = nrm

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def is_empty(self) -> bool:
        return self.vertex_count == 0

    def interleaved(self) -> np.ndarray:
        """`(N, 6)` の [x, y, z, nx, ny, nz] 配列（VBO 用）。"""
        return np.ascontiguousarray(np.hstack([self.positions, self.normals]), dtype=np.float32)

    def bounding_box(self) -> tuple[np.ndarray, np.ndarray]:
        if self.is_empty:
            zero = np.zeros(3, dtype=np.float32)
            return zero, zero.copy()
        return self.positions.min(axis=0), self.positions.max(axis=0)

    def translated(self, dx: float, dy: float, dz: float) -> "MeshGeometry":
        offset = np.array([dx, dy, dz], dtype=np.float32)
        return MeshGeometry(self.positions + offset, self.normals)

    def centered(self) -> "MeshGeometry":
        """バウンディングボックス中心が原点に来るよう平行移動した複製。"""
        lo, hi = self.bounding_box()
        c = (lo + hi) * 0.5
        return self.translated(-float(c[0]), -float(c[1]), -float(c[2]))


def _flat_normals(pos: np.ndarray) -> np.ndarray:
    if pos.shape[0] == 0:
        return np.zeros((0, 3), dtype=np.float32)
    tri = pos.reshape(-1, 3, 3)
    n = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
    length = np.linalg.norm(n, axis=1, keepdims=True)
    n = np.divide(n, length, out=np.zeros_like(n), where=length > 1e-12)
    return np.repeat(n, 3, axis=0).astype(np.float32)


class SceneNode:
    """位置/回転（XYZ, ラジアン）/一様スケールを持つノード。"""

    is_drawable = False

    def __init__(self, name: str | None = None) -> None:
        self.name = name
        self.position: list[float] = [0.0, 0.0, 0.0]
        self.rotation: list[float] = [0.0, 0.0, 0.0]
        self.scale: float = 1.0
        self.children: list[SceneNode] = []
        self.parent: SceneNode | None = None

    def add(self, child: "SceneNode") -> "SceneNode":
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove(self, child: "SceneNode") -> None:
        if child in self.children:
            self.children.remove(child)
            child.parent = None

    def traverse(self) -> Iterator["SceneNode"]:
        """自身→子孫の前順（子は追加順）。走査中の木の変更は想定しない。"""
        yield self
        for child in self.children:
            yield from child.traverse()

    def local_matrix(self) -> np.ndarray:
        return tu.compose(
            (self.position[0], self.position[1], self.position[2]),
            (self.rotation[0], self.rotation[1], self.rotation[2]),
            self.scale,
        )

    def world_matrix(self) -> np.ndarray:
        m = self.local_matrix()
        node = self.parent
        while node is not None:
            m = node.local_matrix() @ m
            node = node.parent
        return m

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, children={len(self.children)})"


class Mesh(SceneNode):
    """描画対象（Drawable）。`material` はキャプチャ中に一時差し替えされる。"""

    is_drawable = True

    def __init__(self, geometry: MeshGeometry, material: Any, name: str | None = None) -> None:
        super().__init__(name)
        self.geometry = geometry
        self.material = material


@dataclass
class DirectionalLight:
    position: tuple[float, float, float] = (5.0, 10.0, 7.0)
    intensity: float = 1.0


class Scene(SceneNode):
    """シーンのルート。背景色と照明を保持する。"""

    def __init__(
        self,
        *,
        background: tuple[float, float, float, float] = (0xF5 / 255, 0xF7 / 255, 0xFA / 255, 1.0),
        ambient_intensity: float = 1.0,
        light: DirectionalLight | None = None,
    ) -> None:
        super().__init__("scene")
        self.background = background
        self.ambient_intensity = ambient_intensity
        self.light = light if light is not None else DirectionalLight()


def iter_drawables(root: SceneNode) -> Iterator[SceneNode]:
    """描画対象のみを前順で列挙する。"""
    for node in root.traverse():
        if getattr(node, "is_drawable", False):
            yield node


def world_bounds(root: SceneNode) -> tuple[np.ndarray, np.ndarray] | None:
    """部分木に含まれる全メッシュのワールド座標 AABB。メッシュが無ければ None。"""
    lows: list[np.ndarray] = []
    highs: list[np.ndarray] = []
    for node in iter_drawables(root):
        geom = getattr(node, "geometry", None)
        if geom is None or geom.is_empty:
            continue
        lo, hi = geom.bounding_box()
        corners = np.array(
            [[x, y, z, 1.0] for x in (lo[0], hi[0]) for y in (lo[1], hi[1]) for z in (lo[2], hi[2])],
            dtype=np.float32,
        )
        world = (node.world_matrix() @ corners.T).T[:, :3]
        lows.append(world.min(axis=0))
        highs.append(world.max(axis=0))
    if not lows:
        return None
    return np.min(lows, axis=0), np.max(highs, axis=0)


__all__ = [
    "DirectionalLight",
    "Mesh",
    "MeshGeometry",
    "Scene",
    "SceneNode",
    "iter_drawables",
    "world_bounds",
]
