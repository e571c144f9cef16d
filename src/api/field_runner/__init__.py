"""
内部ヘルパ群（API 非公開）。

どこで: `api.field_runner`
何を: `api.field` の補助（設定解決の純粋関数/ウィンドウ・サーフェス初期化）を分離する。
なぜ: `run_field` 本体を薄く保ち、pyglet に依存しない部分をテスト可能にするため。
"""

from __future__ import annotations

__all__: list[str] = []
