"""
どこで: `chromadepth.common` パッケージ。
何を: 例外階層・環境変数設定・ロギング補助など、各層で共有する軽量基盤。
なぜ: engine/api の双方から同じ受理仕様とエラー型を参照し、依存の向きを単純化するため。
"""

from .errors import (
    BackendUnavailable,
    ChromadepthError,
    NoSceneLoaded,
    NothingToExport,
    StateRestorationMismatch,
)

__all__ = [
    "BackendUnavailable",
    "ChromadepthError",
    "NoSceneLoaded",
    "NothingToExport",
    "StateRestorationMismatch",
]
