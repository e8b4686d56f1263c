"""共通フィクスチャ。

- 乱数シード固定
- 擬似 GL（FakeGL/FakeRenderer）で動く DepthCapture
- 小さなシーン試料
"""

from __future__ import annotations

import os
from typing import Callable

import numpy as np
import pytest

from chromadepth.common import settings as settings_mod
from chromadepth.engine.capture.depth_capture import DepthCapture
from chromadepth.engine.scene.camera import PerspectiveCamera
from chromadepth.engine.scene.graph import Mesh, Scene, SceneNode
from tests._utils.fakes import FakeGL, FakeRenderer, make_mesh


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """CHROMADEPTH_* 環境変数の影響を切り、テスト後に設定を読み直す。"""
    for key in list(os.environ):
        if key.startswith("CHROMADEPTH_"):
            monkeypatch.delenv(key, raising=False)
    settings_mod.reload_from_env()
    yield
    for key in list(os.environ):
        if key.startswith("CHROMADEPTH_"):
            monkeypatch.delenv(key, raising=False)
    settings_mod.reload_from_env()


@pytest.fixture()
def gl() -> FakeGL:
    return FakeGL()


@pytest.fixture()
def make_capture(gl: FakeGL) -> Callable[..., tuple[DepthCapture, FakeRenderer]]:
    def _make(*, fail_on: str | None = None, **renderer_kwargs) -> tuple[DepthCapture, FakeRenderer]:
        renderer = FakeRenderer(gl, **renderer_kwargs)
        return DepthCapture(renderer, gl.target_factory(fail_on=fail_on)), renderer

    return _make


@pytest.fixture()
def camera() -> PerspectiveCamera:
    cam = PerspectiveCamera(fov=60.0, aspect=1.0, near=0.1, far=100.0)
    cam.position = (0.0, 0.0, 5.0)
    return cam


@pytest.fixture()
def mesh_factory() -> Callable[..., Mesh]:
    return make_mesh


@pytest.fixture()
def scene_two_meshes() -> Scene:
    """ルート直下のメッシュと、グループ内のメッシュを持つシーン。"""
    scene = Scene()
    scene.add(make_mesh("a", depth=40))
    group = scene.add(SceneNode("group"))
    group.add(make_mesh("b", depth=200))
    return scene
