"""
どこで: `chromadepth.engine.render` サブパッケージ。
何を: シーン → GPU 転送・描画の入口。Material/Shader/TriangleMesh/SceneRenderer/OffscreenTarget を提供。
なぜ: 計算（core/compose）と描画の責務を分離し、GPU リソース管理を局所化するため。
"""
