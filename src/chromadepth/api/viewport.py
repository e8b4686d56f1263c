"""
どこで: `chromadepth.api.viewport`
何を: シーン/カメラ/照明/モデル変換を保持し、クロマデプス生成・表示・PNG 出力を行う `ViewportController`。
なぜ: 中核（DepthCapture/ChromadepthCompositor）の前後にある操作（モデル差し替え、回転、
      カメラ距離、ステータス表示）を一箇所へ集約し、失敗を利用者向けメッセージとして返すため。

`ChromadepthError` はステータス（"error", メッセージ）として報告し、戻り値 None で返す。
それ以外の例外はそのまま送出する。
"""

from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping

import numpy as np

from ..common.errors import ChromadepthError, NoSceneLoaded, NothingToExport
from ..common.settings import get as _get_settings
from ..engine.capture.depth_capture import DepthCapture
from ..engine.compose.compositor import ChromadepthCompositor
from ..engine.core.buffers import ChromadepthImage, DepthBuffer
from ..engine.core.ramp import ColorRamp
from ..engine.export.image import save_chromadepth_png, save_depth_map_png
from ..engine.scene.camera import PerspectiveCamera
from ..engine.scene.graph import Scene, SceneNode, world_bounds
from ..util.color import normalize_color
from ..util.paths import ensure_export_dir
from ..util.utils import config_section, load_config

StatusCallback = Callable[[str, str], None]

DEFAULT_MODEL_SIZE = 5.0


class ViewportController:
    """対話ビューポート相当の状態と、クロマデプス生成の手順を管理する。

    Parameters
    ----------
    capture : DepthCapture
        深度キャプチャ（通常は `DepthCapture.from_context(ctx)`）。
    compositor : ChromadepthCompositor | None
        None なら設定（`ramp:` セクション/環境変数）から構築する。
    config : Mapping | None
        構成辞書。None なら `load_config()`。
    status : Callable[[str, str], None] | None
        ステータス通知先 `(kind, message)`。kind は "info"/"success"/"error"。
    """

    def __init__(
        self,
        capture: DepthCapture,
        *,
        compositor: ChromadepthCompositor | None = None,
        scene: Scene | None = None,
        camera: PerspectiveCamera | None = None,
        config: Mapping[str, Any] | None = None,
        status: StatusCallback | None = None,
    ) -> None:
        self._logger = logging.getLogger(__name__)
        cfg = dict(load_config() if config is None else config)
        vp = config_section(cfg, "viewport")
        cam_cfg = config_section(vp, "camera")
        cap_cfg = config_section(cfg, "capture")
        exp_cfg = config_section(cfg, "export")
        settings = _get_settings()

        self.scene = scene if scene is not None else Scene(
            background=normalize_color(vp.get("background", "#f5f7fa"))
        )
        self.camera = camera if camera is not None else PerspectiveCamera(
            fov=float(cam_cfg.get("fov", 75.0)),
            aspect=float(cam_cfg.get("aspect", 1.0)),
            near=float(cam_cfg.get("near", 0.1)),
            far=float(cam_cfg.get("far", 10000.0)),
        )
        self.capture = capture
        self.compositor = compositor if compositor is not None else ChromadepthCompositor(
            ColorRamp.from_config(config_section(cfg, "ramp"), polarity=settings.RAMP_POLARITY)
        )
        self.capture_size = (
            int(settings.CAPTURE_WIDTH or cap_cfg.get("width", 1024)),
            int(settings.CAPTURE_HEIGHT or cap_cfg.get("height", 1024)),
        )
        self.fit_clip_planes = bool(vp.get("fit_clip_planes", True))
        self.export_dir: str | None = exp_cfg.get("directory")
        self._defaults = {
            "rotation": tuple(float(v) for v in vp.get("rotation", (45.0, 45.0, 0.0))),
            "light_intensity": float(vp.get("light_intensity", 1.0)),
            "camera_distance": float(cam_cfg.get("distance", 10.0)),
        }
        self._status = status
        self._rotation_deg: tuple[float, float, float] = (0.0, 0.0, 0.0)
        self.model: SceneNode | None = None
        self.last_image: ChromadepthImage | None = None
        self.reset_view()

    @classmethod
    def from_context(cls, mgl_context: Any, **kwargs: Any) -> "ViewportController":
        return cls(DepthCapture.from_context(mgl_context), **kwargs)

    # ------------------------------------------------------------------ #
    # Status                                                             #
    # ------------------------------------------------------------------ #
    def _report(self, kind: str, message: str) -> None:
        if kind == "error":
            self._logger.error(message)
        else:
            self._logger.info(message)
        if self._status is not None:
            self._status(kind, message)

    # ------------------------------------------------------------------ #
    # Model / view                                                       #
    # ------------------------------------------------------------------ #
    def load_model(self, node: SceneNode, *, size: float = DEFAULT_MODEL_SIZE) -> SceneNode:
        """既存モデルを外して `node` を配置する（原点中心・最大寸法を `size` に揃える）。

        回転は中心まわりに掛かるよう、`node` を回転/スケール用のピボットで包む。
        """
        if self.model is not None:
            self.scene.remove(self.model)
            self.model = None
        # 旧ピボットの変換が外接箱へ混ざらないよう、親から外してから測る
        if node.parent is not None:
            node.parent.remove(node)
        pivot = SceneNode("model")
        bounds = world_bounds(node)
        if bounds is not None:
            lo, hi = bounds
            center = (lo + hi) * 0.5
            node.position = [float(p - c) for p, c in zip(node.position, center)]
            max_dim = float(np.max(hi - lo))
            if max_dim > 0.0:
                pivot.scale = float(size) / max_dim
        pivot.add(node)
        self.scene.add(pivot)
        self.model = pivot
        self._apply_rotation()
        self.last_image = None
        self._report("success", "Model loaded successfully!")
        return pivot

    def _apply_rotation(self) -> None:
        if self.model is None:
            return
        self.model.rotation = [math.radians(v) for v in self._rotation_deg]

    def set_rotation(self, x_deg: float, y_deg: float, z_deg: float) -> None:
        """モデルの XYZ 回転（度）。"""
        self._rotation_deg = (float(x_deg), float(y_deg), float(z_deg))
        self._apply_rotation()

    @property
    def rotation(self) -> tuple[float, float, float]:
        return self._rotation_deg

    def set_light_intensity(self, value: float) -> None:
        self.scene.light.intensity = float(value)

    def set_camera_distance(self, distance: float) -> None:
        """カメラを (0.8d, 0.7d, d) に置き、原点を注視する。"""
        d = float(distance)
        self.camera.position = (d * 0.8, d * 0.7, d)
        self.camera.look_at(0.0, 0.0, 0.0)

    def reset_view(self) -> None:
        rx, ry, rz = self._defaults["rotation"]
        self.set_rotation(rx, ry, rz)
        self.set_light_intensity(self._defaults["light_intensity"])
        self.set_camera_distance(self._defaults["camera_distance"])

    @contextmanager
    def _clip_planes_fitted(self) -> Iterator[None]:
        """near/far をモデルの外接球へ合わせ、終了時に元へ戻す。"""
        bounds = world_bounds(self.scene) if self.fit_clip_planes else None
        if bounds is None:
            yield
            return
        lo, hi = bounds
        center = (lo + hi) * 0.5
        radius = float(np.linalg.norm(hi - lo)) * 0.5
        dist = float(np.linalg.norm(np.asarray(self.camera.position, dtype=np.float32) - center))
        near_old, far_old = self.camera.near, self.camera.far
        near = max(dist - radius, 1e-3)
        far = max(dist + radius, near * 1.01)
        self.camera.near, self.camera.far = near * 0.99, far * 1.01
        try:
            yield
        finally:
            self.camera.near, self.camera.far = near_old, far_old

    # ------------------------------------------------------------------ #
    # Chromadepth                                                        #
    # ------------------------------------------------------------------ #
    def capture_depth(self) -> DepthBuffer:
        """現在の視点で深度バッファを取得する（モデル未読込は `NoSceneLoaded`）。"""
        if self.model is None:
            raise NoSceneLoaded()
        width, height = self.capture_size
        with self._clip_planes_fitted():
            return self.capture.capture(self.scene, self.camera, width, height)

    def generate_chromadepth(self) -> ChromadepthImage | None:
        """深度取得 → 合成。結果は `last_image` に保持する。"""
        if self.model is None:
            self._report("error", NoSceneLoaded().user_message)
            return None
        self._report("info", "Generating chromadepth visualization...")
        try:
            buffer = self.capture_depth()
            image = self.compositor.composite(buffer)
        except ChromadepthError as e:
            self._report("error", f"Error generating chromadepth: {e.user_message}")
            return None
        self.last_image = image
        self._report("success", "Chromadepth generated successfully!")
        return image

    def export_chromadepth(self, path: str | Path | None = None) -> Path | None:
        """直近の生成結果を `chromadepth-visualization.png` として保存する。"""
        if self.last_image is None:
            self._report("error", NothingToExport().user_message)
            return None
        return save_chromadepth_png(self.last_image, path if path is not None else self._export_target())

    def export_depth_map(self, path: str | Path | None = None) -> Path | None:
        """新たに深度を取得し、グレースケールの `depth-map.png` として保存する。"""
        if self.model is None:
            self._report("error", "Load a model first!")
            return None
        try:
            buffer = self.capture_depth()
        except ChromadepthError as e:
            self._report("error", f"Error exporting depth map: {e.user_message}")
            return None
        return save_depth_map_png(buffer, path if path is not None else self._export_target())

    def _export_target(self) -> Path | None:
        if self.export_dir is None:
            return None
        return ensure_export_dir(self.export_dir)

    def show(self, *, run: bool = True) -> Any:
        """直近の生成結果をウィンドウに表示する。"""
        if self.last_image is None:
            self._report("error", NothingToExport().user_message)
            return None
        from ..engine.ui.window import show_image  # 遅延 import（ディスプレイ依存）

        return show_image(self.last_image, run=run)


__all__ = ["ViewportController"]
