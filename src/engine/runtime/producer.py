"""
どこで: `engine.runtime` の起床シグナル生成スレッド。
何を: 一定間隔で `WakeSignal` をイベントループの受信箱へ投げ続けるデーモンスレッド。
なぜ: UI ループのタイミングと無関係な「外部からの通知」を再現し、別スレッドからの
      イベント注入を実演するため。

停止条件:
- 送信が `EventLoopClosed` で失敗した時点で恒久的に終了する（唯一の停止条件）。
- 外部からのキャンセルや join は想定しない（プロセス終了まで生存しうる）。
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from .event_loop import EventLoopClosed, EventLoopProxy
from .events import WakeSignal

logger = logging.getLogger(__name__)

DEFAULT_WAKE_INTERVAL = 1.0


class WakeProducer(threading.Thread):
    """`WakeSignal` を fire-and-forget で送り続ける。"""

    def __init__(
        self,
        proxy: EventLoopProxy,
        *,
        interval: float = DEFAULT_WAKE_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
        thread_name: str = "WakeProducer",
    ) -> None:
        super().__init__(name=thread_name, daemon=True)
        self._proxy = proxy
        self._interval = float(interval)
        self._sleep = sleep
        self.sent_count = 0

    def run(self) -> None:
        while True:
            try:
                self._proxy.send_event(WakeSignal())
            except EventLoopClosed:
                logger.warning("loop no longer exists")
                break
            self.sent_count += 1
            logger.info("sent event")
            # 固定遅延（締め切りではない）。スケジューリング遅延は補正しない
            self._sleep(self._interval)


def spawn_wake_producer(
    proxy: EventLoopProxy, *, interval: float = DEFAULT_WAKE_INTERVAL
) -> WakeProducer:
    """プロデューサを生成して起動する（join しない前提）。"""
    producer = WakeProducer(proxy, interval=interval)
    producer.start()
    return producer


__all__ = ["DEFAULT_WAKE_INTERVAL", "WakeProducer", "spawn_wake_producer"]
