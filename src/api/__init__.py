"""
どこで: `api` 入口（高レベル公開 API）。
何を: ランナー `run_field`（エイリアス `run`）と、色計算の純関数 `color` を再輸出。
なぜ: 利用者が単一名前空間から実行と色計算の検証まで完結できるようにするため。

Usage:
    from api import run

    run()  # ウィンドウを閉じるまで戻らない
"""

from engine.core.color_field import color

from .field import run_field as run
from .field import run_field as run_field

__all__ = [
    "run",  # 実行（エイリアス、簡易）
    "run_field",  # 実行（詳細指定）
    "color",  # 色計算の純関数
]

# バージョン情報
__version__ = "2026.10"
