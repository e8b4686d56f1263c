"""
どこで: `chromadepth.engine.ui` サブパッケージ。
何を: 生成した画像の画面表示（pyglet ウィンドウ）。
なぜ: 表示系の GUI 依存を合成/出力の層から切り離すため。
"""
