"""
どこで: `chromadepth.engine.capture.depth_capture`。
何を: シーン内の全描画対象のマテリアルを深度用へ一時置換し、オフスクリーンへ 1 回描画して
      RGBA 画素を読み戻し、元のマテリアルへ戻して `DepthBuffer` を返す。
なぜ: 共有シーンの見た目を「取得→使用→必ず返却」の局所スコープで扱い、
      失敗経路でも対話表示を壊さないため。

手順:
1) 前順走査で (描画対象, 元マテリアル) を記録しつつ深度マテリアルへ置換
2) 幅×高さのオフスクリーンへ 1 回描画（遠方色 (1,1,1,1) でクリア）
3) RGBA を読み戻す（R が深度の上位 8bit）
4) 同じ順序で再走査し、記録と位置合わせで復元（数/並びの不一致は `StateRestorationMismatch`）

同一シーンへのキャプチャはシーン単位のロックで直列化する。
"""

from __future__ import annotations

import logging
import threading
import weakref
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from ...common.errors import BackendUnavailable, StateRestorationMismatch
from ..core.buffers import DepthBuffer
from ..render.materials import DepthMaterial
from ..render.target import OffscreenTarget, framebuffer_target_factory
from ..scene.graph import iter_drawables

logger = logging.getLogger(__name__)

# 背景（何も描かれない画素）は最遠方 = 深度 255
FAR_CLEAR_COLOR = (1.0, 1.0, 1.0, 1.0)
CHANNELS = 4

TargetFactory = Callable[[int, int], OffscreenTarget]

_scene_locks: "weakref.WeakKeyDictionary[Any, threading.Lock]" = weakref.WeakKeyDictionary()
_scene_locks_guard = threading.Lock()


def scene_capture_lock(scene: Any) -> threading.Lock:
    """シーンごとのキャプチャ用ロック（シーン破棄とともに消える）。"""
    with _scene_locks_guard:
        lock = _scene_locks.get(scene)
        if lock is None:
            lock = threading.Lock()
            _scene_locks[scene] = lock
        return lock


def _restore(root: Any, recorded: list[tuple[Any, Any]]) -> None:
    drawables = list(iter_drawables(root))
    mismatch = len(drawables) != len(recorded) or any(
        node is not rec for node, (rec, _) in zip(drawables, recorded)
    )
    if mismatch:
        # 位置合わせは信用できないため、記録した組を同一性で書き戻してから失敗を報告する
        for node, original in recorded:
            node.material = original
        logger.error(
            "material restoration mismatch: substituted=%d found=%d",
            len(recorded),
            len(drawables),
        )
        raise StateRestorationMismatch(len(recorded), len(drawables))
    for node, (_, original) in zip(drawables, recorded):
        node.material = original


@contextmanager
def substituted_materials(root: Any, material: Any) -> Iterator[list[tuple[Any, Any]]]:
    """`root` 配下の全描画対象のマテリアルを `material` に置換し、終了時に必ず復元する。

    yield するのは走査順の (描画対象, 元マテリアル) リスト（呼び出しごとに新規）。
    """
    recorded: list[tuple[Any, Any]] = []
    complete = False
    pending: BaseException | None = None
    try:
        for node in iter_drawables(root):
            recorded.append((node, node.material))
            node.material = material
        complete = True
        yield recorded
    except BaseException as e:
        pending = e
        raise
    finally:
        if complete:
            try:
                _restore(root, recorded)
            except StateRestorationMismatch as mismatch:
                if pending is None:
                    raise
                # 先行していた失敗（描画/読み戻し）を捨てずに両方を報告する
                logger.error("restoration mismatch while handling: %r", pending, exc_info=pending)
                raise StateRestorationMismatch(
                    mismatch.expected, mismatch.actual, masked=pending
                ) from pending
        else:
            # 置換の途中で失敗: 置換済みの分だけ戻す
            for node, original in recorded:
                node.material = original


class DepthCapture:
    """深度のみの描画パスを 1 回実行して `DepthBuffer` を返す。

    Parameters
    ----------
    renderer : Any
        `render(scene, camera, *, clear_color)` を持つ描画器（通常は `SceneRenderer`）。
    target_factory : Callable[[int, int], OffscreenTarget]
        幅/高さからオフスクリーンターゲットを作る関数。
    depth_material : Any | None
        置換に使う共有マテリアル。None で `DepthMaterial()`。
    """

    def __init__(
        self,
        renderer: Any,
        target_factory: TargetFactory,
        *,
        depth_material: Any | None = None,
    ) -> None:
        self.renderer = renderer
        self.target_factory = target_factory
        self.depth_material = depth_material if depth_material is not None else DepthMaterial()

    @classmethod
    def from_context(cls, mgl_context: Any) -> "DepthCapture":
        """moderngl コンテキストから SceneRenderer/FramebufferTarget 構成で生成する。"""
        from ..render.renderer import SceneRenderer  # 遅延 import（GL 依存を局所化）

        return cls(SceneRenderer(mgl_context), framebuffer_target_factory(mgl_context))

    def capture(self, scene: Any, camera: Any, width: int, height: int) -> DepthBuffer:
        """シーンを `camera` から `width × height` で深度描画し、読み戻した画素を返す。

        描画対象が無いシーンは全画素が背景深度（255）のバッファになる（エラーではない）。

        Raises
        ------
        ValueError
            width/height が正でない。
        BackendUnavailable
            ターゲット確保/描画/読み戻しの失敗（`stage` で区別）。
        StateRestorationMismatch
            復元時の描画対象の数/並びが置換時と一致しない。
        """
        width = int(width)
        height = int(height)
        if width <= 0 or height <= 0:
            raise ValueError(f"capture size must be positive: {width}x{height}")

        with scene_capture_lock(scene):
            try:
                target = self.target_factory(width, height)
                target.allocate()
            except Exception as e:
                logger.error("offscreen target allocation failed (%dx%d)", width, height, exc_info=True)
                raise BackendUnavailable("allocate", e) from e

            try:
                with substituted_materials(scene, self.depth_material) as recorded:
                    logger.debug(
                        "depth pass: %d drawable(s), target %dx%d", len(recorded), width, height
                    )
                    try:
                        target.use()
                        self.renderer.render(scene, camera, clear_color=FAR_CLEAR_COLOR)
                    except Exception as e:
                        logger.error("depth render failed", exc_info=True)
                        raise BackendUnavailable("render", e) from e
                    try:
                        raw = target.read()
                    except Exception as e:
                        logger.error("depth readback failed", exc_info=True)
                        raise BackendUnavailable("readback", e) from e
            finally:
                target.release()

        try:
            return DepthBuffer.from_bytes(raw, width, height, CHANNELS)
        except ValueError as e:
            # 読み戻しサイズが要求と一致しない
            raise BackendUnavailable("readback", e) from e


__all__ = [
    "CHANNELS",
    "DepthCapture",
    "FAR_CLEAR_COLOR",
    "scene_capture_lock",
    "substituted_materials",
]
