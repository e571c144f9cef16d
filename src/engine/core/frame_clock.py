"""
どこで: `engine.core` の簡易ループドライバ。
何を: `Tickable` の列を固定順序で呼び出す FrameClock。pyglet.clock 互換オブジェクトへ
      「ループ反復ごと」の呼び出しとして自身を登録/解除できる。
なぜ: アイドル待ちをしない継続ポーリング（受信箱の排出など）を 1 か所で駆動するため。
"""

from __future__ import annotations

import time
from typing import Any, Sequence

from .tickable import Tickable


class FrameClock:
    """登録された Tickable を固定順序で実行し、反復回数を数える。"""

    def __init__(self, tickables: Sequence[Tickable]):
        self._tickables = tuple(tickables)
        self._last_time = time.perf_counter()
        self._attached: list[Any] = []
        self.ticks = 0

    def tick(self, dt: float | None = None) -> None:
        # pyglet は dt を渡す。直接呼ばれた場合は自前で測る
        now = time.perf_counter()
        if dt is None:
            dt = now - self._last_time
        self._last_time = now

        self.ticks += 1
        for t in self._tickables:
            t.tick(dt)

    def attach(self, clock: Any) -> None:
        """`clock.schedule(self.tick)` で毎反復呼ばれるよう登録する（多重登録しない）。"""
        if clock in self._attached:
            return
        clock.schedule(self.tick)
        self._attached.append(clock)

    def detach(self) -> None:
        """`attach` した全クロックから登録を外す。"""
        while self._attached:
            self._attached.pop().unschedule(self.tick)


__all__ = ["FrameClock"]
