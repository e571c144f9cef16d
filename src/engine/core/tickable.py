"""
どこで: `engine.core` の更新インターフェース。
何を: ループ 1 反復ぶんの処理 `tick(dt)` を持つ `Tickable` Protocol を定義。
なぜ: ループ反復ごとに駆動するオブジェクト（イベント受信箱など）を FrameClock から一様に扱うため。
"""

from typing import Protocol


class Tickable(Protocol):
    """ループ 1 反復ぶんの処理を行うインターフェース。"""

    def tick(self, dt: float) -> None:
        """前回呼び出しから `dt` 秒経過した時点の処理を行う。"""
