"""
どこで: `chromadepth.engine.render` の高レベル描画。
何を: シーングラフを前順に走査し、各 Mesh をそのマテリアルのシェーダで現在の FBO へ描画する。
なぜ: 通常表示と深度パスが同じ走査/行列計算を共有し、違いをマテリアル参照だけに閉じ込めるため。
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import moderngl as mgl

from ..core import transform_utils as tu
from ..scene.camera import PerspectiveCamera
from ..scene.graph import Scene, iter_drawables
from .mesh_buffer import TriangleMesh
from .shader import Shader, set_uniform


class SceneRenderer:
    """
    シーン内のジオメトリを GPU に保持し、毎回の描画でマテリアルごとのプログラムへ振り分ける。
    プログラムは種別ごと、VBO はメッシュごとに 1 度だけ作ってキャッシュする。
    """

    def __init__(self, mgl_context: Any):
        self.ctx = mgl_context
        self._logger = logging.getLogger(__name__)
        self._programs: dict[str, Any] = {}
        # id(Mesh) -> TriangleMesh（ジオメトリ差し替えを検知して張り直す）
        self._meshes: dict[int, TriangleMesh] = {}
        self._last_draw_count: int = 0

    @property
    def last_draw_count(self) -> int:
        """直近の `render()` で描画したメッシュ数。"""
        return self._last_draw_count

    def program_for(self, material: Any) -> tuple[str, Any]:
        kind = getattr(material, "kind", None)
        if not isinstance(kind, str):
            raise ValueError(f"unsupported material: {material!r}")
        program = self._programs.get(kind)
        if program is None:
            program = Shader.create_program(self.ctx, kind)
            self._programs[kind] = program
        return kind, program

    def _gpu_mesh(self, node: Any) -> TriangleMesh | None:
        geometry = node.geometry
        if geometry is None or geometry.is_empty:
            return None
        key = id(node)
        mesh = self._meshes.get(key)
        if mesh is not None and mesh.geometry is not geometry:
            mesh.release()
            mesh = None
        if mesh is None:
            mesh = TriangleMesh(self.ctx, geometry)
            self._meshes[key] = mesh
        return mesh

    def _prune(self, alive: set[int]) -> None:
        """直近の描画で使われなかったメッシュの GPU バッファを解放する。"""
        for key in [k for k in self._meshes if k not in alive]:
            self._meshes.pop(key).release()

    def clear(self, color: Sequence[float]) -> None:
        """現在の FBO を指定色でクリア（深度は 1.0）"""
        r, g, b, a = (float(c) for c in color)
        self.ctx.clear(r, g, b, a, depth=1.0)

    def render(
        self,
        scene: Scene,
        camera: PerspectiveCamera,
        *,
        clear_color: Sequence[float] | None = None,
    ) -> None:
        """現在バインドされている FBO/ビューポートへシーンを描画する。"""
        self.ctx.enable(mgl.DEPTH_TEST)
        self.clear(clear_color if clear_color is not None else scene.background)

        view = camera.view_matrix()
        projection = camera.projection_matrix()
        light = scene.light
        drawn = 0
        seen: set[int] = set()
        for node in iter_drawables(scene):
            mesh = self._gpu_mesh(node)
            if mesh is None:
                continue
            seen.add(id(node))
            kind, program = self.program_for(node.material)
            model = node.world_matrix()
            set_uniform(program, "u_model", tu.to_gl_bytes(model))
            set_uniform(program, "u_view", tu.to_gl_bytes(view))
            set_uniform(program, "u_projection", tu.to_gl_bytes(projection))
            if kind == "phong":
                nm = tu.normal_matrix(model)
                set_uniform(program, "u_normal_matrix", tu.to_gl_bytes(nm))
                set_uniform(program, "u_color", tuple(float(c) for c in node.material.color))
                set_uniform(program, "u_shininess", float(node.material.shininess))
                set_uniform(program, "u_ambient", float(scene.ambient_intensity))
                set_uniform(program, "u_light_position", tuple(float(c) for c in light.position))
                set_uniform(program, "u_light_intensity", float(light.intensity))
                set_uniform(program, "u_camera_position", tuple(float(c) for c in camera.position))
            mesh.render(kind, program, mgl.TRIANGLES)
            drawn += 1
        self._last_draw_count = drawn
        self._prune(seen)
        self._logger.debug("rendered %d mesh(es)", drawn)

    def release(self) -> None:
        for mesh in self._meshes.values():
            mesh.release()
        self._meshes.clear()
        for program in self._programs.values():
            program.release()
        self._programs.clear()
