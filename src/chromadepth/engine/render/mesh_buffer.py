"""
どこで: `chromadepth.engine.render` の低レベルメッシュ層。
何を: 1 つの MeshGeometry に対応する VBO と、シェーダ種別ごとの VAO の確保・解放を担当。
なぜ: GPU 転送の詳細を SceneRenderer から切り離し、VAO の張り直しを一元化するため。
"""

from __future__ import annotations

from typing import Any

from ..scene.graph import MeshGeometry
from .shader import VERTEX_LAYOUTS


class TriangleMesh:
    """
    GPUに頂点データを送り込み、マテリアル種別ごとの VAO で三角形を描画する
    """

    def __init__(self, ctx: Any, geometry: MeshGeometry):
        """
        ctx: moderngl コンテキスト
        geometry: 転送元のジオメトリ（非インデックス三角形リスト, 空は不可）
        VBO (Vertex Buffer Object): 位置/法線をインターリーブした頂点データ。
        VAO (Vertex Array Object): VBO とシェーダ入力の対応。シェーダごとに作る。
        """
        if geometry.is_empty:
            raise ValueError("TriangleMesh requires a non-empty geometry")
        self.ctx = ctx
        self.geometry = geometry
        self.vertex_count = geometry.vertex_count
        self.vbo = ctx.buffer(geometry.interleaved().tobytes())
        self._vaos: dict[str, Any] = {}

    def vao_for(self, kind: str, program: Any) -> Any:
        vao = self._vaos.get(kind)
        if vao is None:
            fmt, attrs = VERTEX_LAYOUTS[kind]
            vao = self.ctx.vertex_array(program, [(self.vbo, fmt, *attrs)])
            self._vaos[kind] = vao
        return vao

    def render(self, kind: str, program: Any, mode: int) -> None:
        self.vao_for(kind, program).render(mode, vertices=self.vertex_count)

    def release(self) -> None:
        """GPUのメモリを解放する（終了時/ジオメトリ差し替え時に使う）"""
        for vao in self._vaos.values():
            vao.release()
        self._vaos.clear()
        self.vbo.release()
