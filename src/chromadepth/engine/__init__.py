"""
どこで: `chromadepth.engine` パッケージ。
何を: 色写像（core）・シーン（scene）・描画（render）・深度取得（capture）・合成（compose）・出力（export/ui）。
なぜ: 純粋計算と GPU/ウィンドウ依存の層を分け、前者をコンテキスト無しで検証できるようにするため。
"""
