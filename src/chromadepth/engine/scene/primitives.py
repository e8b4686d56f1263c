"""
どこで: `chromadepth.engine.scene.primitives`。
何を: 平面/直方体/UV 球の三角形メッシュ生成。
なぜ: ファイル読込を持たない本パッケージで、表示確認や深度キャプチャの検証用形状を用意するため。
"""

from __future__ import annotations

import math

import numpy as np

from .graph import MeshGeometry


def plane(width: float = 1.0, height: float = 1.0) -> MeshGeometry:
    """XY 平面上（+Z 向き）の矩形。中心は原点。"""
    w = width / 2.0
    h = height / 2.0
    pos = np.array(
        [
            [-w, -h, 0.0], [w, -h, 0.0], [w, h, 0.0],
            [-w, -h, 0.0], [w, h, 0.0], [-w, h, 0.0],
        ],
        dtype=np.float32,
    )
    return MeshGeometry(pos)


def box(width: float = 1.0, height: float = 1.0, depth: float = 1.0) -> MeshGeometry:
    """原点中心の直方体（面ごとのフラット法線）。"""
    x, y, z = width / 2.0, height / 2.0, depth / 2.0
    c = np.array(
        [
            [-x, -y, -z], [x, -y, -z], [x, y, -z], [-x, y, -z],
            [-x, -y, z], [x, -y, z], [x, y, z], [-x, y, z],
        ],
        dtype=np.float32,
    )
    # 外向き（反時計回り）の 12 三角形
    faces = [
        (4, 5, 6), (4, 6, 7),  # +Z
        (1, 0, 3), (1, 3, 2),  # -Z
        (5, 1, 2), (5, 2, 6),  # +X
        (0, 4, 7), (0, 7, 3),  # -X
        (7, 6, 2), (7, 2, 3),  # +Y
        (0, 1, 5), (0, 5, 4),  # -Y
    ]
    pos = c[np.array(faces, dtype=np.int64).reshape(-1)]
    return MeshGeometry(pos)


def uv_sphere(radius: float = 1.0, segments: int = 24, rings: int = 16) -> MeshGeometry:
    """原点中心の UV 球（頂点法線はスムーズ）。"""
    if segments < 3 or rings < 2:
        raise ValueError("uv_sphere needs segments >= 3 and rings >= 2")
    grid = np.empty((rings + 1, segments + 1, 3), dtype=np.float32)
    for i in range(rings + 1):
        theta = math.pi * i / rings
        for j in range(segments + 1):
            phi = 2.0 * math.pi * j / segments
            grid[i, j] = (
                math.sin(theta) * math.cos(phi),
                math.cos(theta),
                math.sin(theta) * math.sin(phi),
            )
    tris: list[np.ndarray] = []
    for i in range(rings):
        for j in range(segments):
            a, b = grid[i, j], grid[i + 1, j]
            c, d = grid[i + 1, j + 1], grid[i, j + 1]
            if i != 0:
                tris.append(np.stack([a, d, b]))
            if i != rings - 1:
                tris.append(np.stack([b, d, c]))
    unit = np.concatenate(tris, axis=0).astype(np.float32)
    return MeshGeometry(unit * float(radius), unit)


__all__ = ["box", "plane", "uv_sphere"]
