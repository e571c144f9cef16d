"""
どこで: `engine.core` サブパッケージ。
何を: カラーフィールド計算・フレーム駆動（Tickable/FrameClock）・描画ウィンドウを提供。
なぜ: 計算とループ駆動の基盤を構成し、上位層（Runtime/Render/API）から再利用可能にするため。
"""
