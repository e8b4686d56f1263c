"""
どこで: `chromadepth.common.errors`
何を: キャプチャ/合成/エクスポートで送出する例外階層。
なぜ: 失敗の種類ごとにユーザー向けメッセージを区別し、握り潰さずに呼び出し側へ返すため。
"""

from __future__ import annotations


class ChromadepthError(Exception):
    """ユーザーへ表示可能なメッセージを持つ基底例外。"""

    default_message = "Chromadepth operation failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        return str(self)


class NoSceneLoaded(ChromadepthError):
    """モデル未読込でキャプチャ/エクスポートが要求された（前提条件エラー）。"""

    default_message = "Please load a model first!"


class NothingToExport(ChromadepthError):
    """クロマデプス生成前に画像エクスポートが要求された。"""

    default_message = "Generate chromadepth first!"


class BackendUnavailable(ChromadepthError):
    """オフスクリーンターゲットの確保/描画/読み戻しに失敗した。

    `stage` は "allocate" / "render" / "readback" のいずれか。
    """

    def __init__(self, stage: str, original: BaseException | None = None) -> None:
        detail = f": {original}" if original is not None else ""
        super().__init__(f"Rendering backend unavailable during {stage}{detail}")
        self.stage = stage
        self.original = original

    def __reduce__(self):
        return (BackendUnavailable, (self.stage, self.original))


class StateRestorationMismatch(ChromadepthError):
    """復元した描画対象の数/並びが置換時と一致しない（プログラム欠陥の兆候）。

    シーンのマテリアル状態は不整合とみなし、モデルの再読込を促す。
    描画/読み戻しの失敗を処理中に検出した場合は、その失敗を `masked` に保持しメッセージにも含める。
    """

    def __init__(
        self, expected: int, actual: int, masked: BaseException | None = None
    ) -> None:
        message = (
            f"Material restoration mismatch (substituted {expected}, found {actual}); "
            "please reload the model"
        )
        if masked is not None:
            message += f" (while handling: {masked})"
        super().__init__(message)
        self.expected = expected
        self.actual = actual
        self.masked = masked

    def __reduce__(self):
        return (StateRestorationMismatch, (self.expected, self.actual, self.masked))


__all__ = [
    "BackendUnavailable",
    "ChromadepthError",
    "NoSceneLoaded",
    "NothingToExport",
    "StateRestorationMismatch",
]
