"""
どこで: `chromadepth.common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str

POLARITIES = ("near_warm", "near_cool")


@dataclass
class _Settings:
    # Capture（None なら YAML/既定値を使用）
    CAPTURE_WIDTH: int | None = None
    CAPTURE_HEIGHT: int | None = None

    # ColorRamp
    RAMP_POLARITY: str | None = None

    # Compositor
    PARALLEL_COMPOSITE: bool = True
    PARALLEL_MIN_PIXELS: int = 512 * 512

    # Misc
    LOG_LEVEL: str = "info"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int`、文字列は `env_str` を使用。
    - 解像度は 1 未満を不正とみなし未設定扱いにする。
    """

    # Capture
    w = env_int("CHROMADEPTH_CAPTURE_WIDTH", None)
    h = env_int("CHROMADEPTH_CAPTURE_HEIGHT", None)
    _settings.CAPTURE_WIDTH = w if w is not None and w > 0 else None
    _settings.CAPTURE_HEIGHT = h if h is not None and h > 0 else None

    # ColorRamp
    _settings.RAMP_POLARITY = env_str("CHROMADEPTH_RAMP_POLARITY", None, choices=POLARITIES)

    # Compositor（下限丸め）
    _settings.PARALLEL_COMPOSITE = env_bool("CHROMADEPTH_PARALLEL_COMPOSITE", True)
    _settings.PARALLEL_MIN_PIXELS = (
        env_int("CHROMADEPTH_PARALLEL_MIN_PIXELS", 512 * 512, min_value=0) or 0
    )

    # Misc
    _settings.LOG_LEVEL = env_str("CHROMADEPTH_LOG_LEVEL", "info") or "info"


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings", "POLARITIES"]
