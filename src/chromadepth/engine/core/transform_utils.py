"""
どこで: `chromadepth.engine.core` の変換ユーティリティ。
何を: モデル/ビュー/射影の 4x4 行列（列ベクトル規約, float32）を生成する関数群。
なぜ: シーングラフとカメラが同じ規約で行列を組み立て、シェーダへそのまま渡せるようにするため。

GPU へ送る際は列優先になるよう `to_gl_bytes()` で転置してからバイト列化する。
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

Vec3 = tuple[float, float, float]


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float32)


def translation(x: float, y: float, z: float) -> np.ndarray:
    m = identity()
    m[:3, 3] = (x, y, z)
    return m


def scaling(s: float | Sequence[float]) -> np.ndarray:
    if isinstance(s, (int, float)):
        sx = sy = sz = float(s)
    else:
        sx, sy, sz = (float(v) for v in s)
    return np.diag([sx, sy, sz, 1.0]).astype(np.float32)


def rotation_xyz(rx: float, ry: float, rz: float) -> np.ndarray:
    """XYZ 順のオイラー回転（ラジアン）。`Rx @ Ry @ Rz` を返す。"""
    cx, sx = math.cos(rx), math.sin(rx)
    cy, sy = math.cos(ry), math.sin(ry)
    cz, sz = math.cos(rz), math.sin(rz)
    rot_x = np.array([[1, 0, 0, 0], [0, cx, -sx, 0], [0, sx, cx, 0], [0, 0, 0, 1]], dtype=np.float32)
    rot_y = np.array([[cy, 0, sy, 0], [0, 1, 0, 0], [-sy, 0, cy, 0], [0, 0, 0, 1]], dtype=np.float32)
    rot_z = np.array([[cz, -sz, 0, 0], [sz, cz, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]], dtype=np.float32)
    return rot_x @ rot_y @ rot_z


def compose(position: Vec3, rotation: Vec3, scale: float | Sequence[float]) -> np.ndarray:
    """T @ R @ S の合成変換。"""
    return translation(*position) @ rotation_xyz(*rotation) @ scaling(scale)


def look_at(eye: Vec3, target: Vec3, up: Vec3 = (0.0, 1.0, 0.0)) -> np.ndarray:
    """右手系ビュー行列（カメラは -Z を向く）。"""
    e = np.asarray(eye, dtype=np.float64)
    f = np.asarray(target, dtype=np.float64) - e
    n = np.linalg.norm(f)
    if n < 1e-12:
        raise ValueError("look_at: eye and target must differ")
    f /= n
    s = np.cross(f, np.asarray(up, dtype=np.float64))
    if np.linalg.norm(s) < 1e-12:
        # 視線と up が平行な場合は Z 軸を仮の up にする
        s = np.cross(f, np.array([0.0, 0.0, 1.0]))
    s /= np.linalg.norm(s)
    u = np.cross(s, f)
    m = np.eye(4, dtype=np.float64)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[:3, 3] = (-s.dot(e), -u.dot(e), f.dot(e))
    return m.astype(np.float32)


def perspective(fov_deg: float, aspect: float, near: float, far: float) -> np.ndarray:
    """OpenGL 規約（NDC z ∈ [-1, 1]）の透視射影行列。"""
    if not (0.0 < near < far):
        raise ValueError(f"perspective: require 0 < near < far (got {near}, {far})")
    if aspect <= 0.0:
        raise ValueError("perspective: aspect must be positive")
    f = 1.0 / math.tan(math.radians(fov_deg) / 2.0)
    m = np.zeros((4, 4), dtype=np.float32)
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) / (near - far)
    m[2, 3] = (2.0 * far * near) / (near - far)
    m[3, 2] = -1.0
    return m


def normal_matrix(model: np.ndarray) -> np.ndarray:
    """法線変換用 3x3（モデル行列上 3x3 の逆転置）。"""
    return np.linalg.inv(model[:3, :3]).T.astype(np.float32)


def to_gl_bytes(m: np.ndarray) -> bytes:
    """行優先の numpy 行列を列優先バイト列（GLSL の mat 既定）へ変換する。"""
    return np.ascontiguousarray(m.T, dtype=np.float32).tobytes()


__all__ = [
    "compose",
    "identity",
    "look_at",
    "normal_matrix",
    "perspective",
    "rotation_xyz",
    "scaling",
    "to_gl_bytes",
    "translation",
]
