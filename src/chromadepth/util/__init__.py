"""
どこで: `chromadepth.util` パッケージ。
何を: 色指定の正規化、構成ファイル読込、出力先パス解決などの小道具。
なぜ: engine/api から共通に使う補助処理を一箇所にまとめるため。
"""
