"""
どこで: `chromadepth.engine.scene.camera`。
何を: 透視カメラ（視野角/アスペクト/near/far と注視点）からビュー/射影行列を作る。
なぜ: 通常描画と深度パスが同一視点の行列を共有し、深度値の範囲を near/far で制御するため。
"""

from __future__ import annotations

from ..core import transform_utils as tu

Vec3 = tuple[float, float, float]


class PerspectiveCamera:
    def __init__(
        self,
        fov: float = 75.0,
        aspect: float = 1.0,
        near: float = 0.1,
        far: float = 10000.0,
    ) -> None:
        self.fov = float(fov)
        self.aspect = float(aspect)
        self.near = float(near)
        self.far = float(far)
        self.position: Vec3 = (0.0, 0.0, 10.0)
        self.target: Vec3 = (0.0, 0.0, 0.0)
        self.up: Vec3 = (0.0, 1.0, 0.0)

    def look_at(self, x: float, y: float, z: float) -> None:
        self.target = (float(x), float(y), float(z))

    def view_matrix(self):
        return tu.look_at(self.position, self.target, self.up)

    def projection_matrix(self):
        return tu.perspective(self.fov, self.aspect, self.near, self.far)

    def distance_to_target(self) -> float:
        px, py, pz = self.position
        tx, ty, tz = self.target
        return ((px - tx) ** 2 + (py - ty) ** 2 + (pz - tz) ** 2) ** 0.5

    def __repr__(self) -> str:
        return (
            f"PerspectiveCamera(fov={self.fov}, aspect={self.aspect}, near={self.near}, "
            f"far={self.far}, position={self.position})"
        )
