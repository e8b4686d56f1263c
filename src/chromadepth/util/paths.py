"""
どこで: `chromadepth.util.paths`。
何を: 画像の保存先ディレクトリの生成と、重複しないファイル名の解決を提供する。
なぜ: エクスポート処理から簡潔に保存先を扱え、並行呼び出しでも安全に作成できるようにするため。
"""

from __future__ import annotations

from pathlib import Path

from .utils import _find_project_root


def ensure_export_dir(directory: str | Path | None = None) -> Path:
    """画像出力先を作成して返す。

    - `directory` 省略時はプロジェクトルート直下の `data/export/` を使う。
    - 相対パスはプロジェクトルート基準で解決する。
    - 並行呼び出しに対して `exist_ok=True` で安全。
    """
    root = _find_project_root(Path(__file__).parent)
    if directory is None:
        out = root / "data" / "export"
    else:
        out = Path(directory)
        if not out.is_absolute():
            out = root / out
    out.mkdir(parents=True, exist_ok=True)
    return out


def unique_path(path: Path) -> Path:
    """`path` が既存なら `stem-1.png` のように連番を付けた未使用パスを返す。"""
    if not path.exists():
        return path
    stem = path.stem
    suffix = path.suffix
    parent = path.parent
    i = 1
    while True:
        cand = parent / f"{stem}-{i}{suffix}"
        if not cand.exists():
            return cand
        i += 1
