"""
どこで: `chromadepth.engine.render.materials`。
何を: 描画対象の見た目を表すマテリアル（通常表示用 Phong と深度パス用 Depth）。
なぜ: レンダラがマテリアル種別ごとにシェーダを選び、深度キャプチャが参照の差し替えだけで
      描画内容を切り替えられるようにするため。

マテリアルは同一性（`is`）で比較する。キャプチャ後の復元検証は参照の一致で行う。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(eq=False)
class Material:
    kind: ClassVar[str] = "base"


@dataclass(eq=False)
class PhongMaterial(Material):
    """単色 + 拡散/鏡面反射の通常表示用マテリアル。"""

    kind: ClassVar[str] = "phong"

    color: tuple[float, float, float] = (0x88 / 255, 0x88 / 255, 0x88 / 255)
    shininess: float = 30.0


@dataclass(eq=False)
class DepthMaterial(Material):
    """フラグメント深度を RGB にパックして書き出す深度パス用マテリアル。

    R に上位 8bit、G/B に下位の端数を格納する（α は 1）。
    """

    kind: ClassVar[str] = "depth"


__all__ = ["DepthMaterial", "Material", "PhongMaterial"]
