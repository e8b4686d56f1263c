#!/usr/bin/env python3
"""
チュートリアル 01: クロマデプス画像の生成

基本形状を並べたモデルを読み込み、深度を取得して色相画像に変換します。
生成した画像と生の深度マップを PNG で保存し、ウィンドウに表示します。
"""
import logging
import os
import sys

# Ensure src/ is importable with highest precedence
SRC_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, "src"))
while SRC_ROOT in sys.path:
    sys.path.remove(SRC_ROOT)
sys.path.insert(0, SRC_ROOT)

import moderngl

from chromadepth.api import ViewportController
from chromadepth.common.logging import setup_default_logging
from chromadepth.engine.render.materials import PhongMaterial
from chromadepth.engine.scene import primitives
from chromadepth.engine.scene.graph import Mesh, SceneNode


def build_model():
    """
    手前から奥へ並ぶ 3 つの形状

    Returns:
        SceneNode: 読み込むモデル
    """
    model = SceneNode("shapes")
    sphere = model.add(Mesh(primitives.uv_sphere(1.0), PhongMaterial(color=(0.9, 0.4, 0.3)), "sphere"))
    sphere.position = [0.0, 0.0, 2.5]
    box = model.add(Mesh(primitives.box(1.5, 1.5, 1.5), PhongMaterial(), "box"))
    box.position = [0.0, 0.0, 0.0]
    floor = model.add(Mesh(primitives.plane(6.0, 6.0), PhongMaterial(color=(0.5, 0.5, 0.6)), "floor"))
    floor.position = [0.0, 0.0, -2.5]
    return model


def main():
    setup_default_logging()
    logger = logging.getLogger(__name__)
    # headless モード:
    #   - ウィンドウを開かず、生成と PNG 保存のみ行います（GL はスタンドアロンコンテキスト）。
    #   - 有効化方法: `CHROMADEPTH_HEADLESS=1 python tutorials/01_chromadepth_capture.py`
    headless = os.environ.get("CHROMADEPTH_HEADLESS") == "1"

    ctx = moderngl.create_standalone_context()
    viewport = ViewportController.from_context(
        ctx, status=lambda kind, msg: logger.debug("[%s] %s", kind, msg)
    )
    viewport.load_model(build_model())
    viewport.set_rotation(20.0, 35.0, 0.0)

    if viewport.generate_chromadepth() is None:
        return 1
    logger.info("saved: %s", viewport.export_chromadepth())
    logger.info("saved: %s", viewport.export_depth_map())

    if not headless:
        viewport.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
