"""
どこで: `engine.render` サブパッケージ。
何を: CPU ピクセルサーフェス（PixelSurface）と画面転送（PygletPresenter）を提供。
なぜ: バッファ寿命の管理と pyglet 依存の転送処理を分離し、描画資源の扱いを局所化するため。
"""
