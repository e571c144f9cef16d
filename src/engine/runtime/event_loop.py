"""
どこで: `engine.runtime` のイベント受信箱。
何を: 別スレッドからイベントを投入する `EventLoopProxy` と、メインスレッドで受信箱を
      排出してハンドラへ 1 件ずつ渡す `EventLoop` を提供。
なぜ: UI ループをブロックせずに外部スレッドからの通知を取り込み、ループ終了後の送信は
      「失敗」として送信側に返すため（送信側の唯一の停止条件になる）。

スレッド規約:
- `EventLoopProxy.send_event()` は任意スレッドから呼べる。決してブロックしない。
- `tick()`/`dispatch()`/`exit()` はループを所有するスレッドからのみ呼ぶ。
"""

from __future__ import annotations

import logging
import threading
from queue import Empty, SimpleQueue
from typing import Callable, Generic, TypeVar

from ..core.tickable import Tickable

logger = logging.getLogger(__name__)

E = TypeVar("E")


class EventLoopClosed(RuntimeError):
    """送信先のイベントループが既に存在しない。"""


class EventLoopProxy(Generic[E]):
    """受信箱への送信ハンドル（複製して別スレッドへ渡してよい）。"""

    def __init__(self, loop: "EventLoop[E]"):
        self._loop = loop

    def send_event(self, event: E) -> None:
        """イベントを受信箱へ積む。ループ終了後は `EventLoopClosed`。"""
        self._loop._post(event)

    def clone(self) -> "EventLoopProxy[E]":
        return EventLoopProxy(self._loop)


class EventLoop(Tickable, Generic[E]):
    """単一消費者の受信箱。`tick(dt)` で溜まったイベントを到着順に処理する。"""

    def __init__(self, notify: Callable[[], None] | None = None):
        """
        notify: 送信のたびに呼ぶ起床フック（例: `pyglet.app.platform_event_loop.notify`）。
                スレッドセーフであること。
        """
        self._inbox: SimpleQueue[E] = SimpleQueue()
        self._lock = threading.Lock()
        self._closed = False
        self._notify = notify
        self._handler: Callable[[E], None] | None = None
        self._on_exit: list[Callable[[], None]] = []

    # ---- wiring ----
    def create_proxy(self) -> EventLoopProxy[E]:
        return EventLoopProxy(self)

    def set_handler(self, handler: Callable[[E], None]) -> None:
        self._handler = handler

    def add_exit_callback(self, cb: Callable[[], None]) -> None:
        """`exit()` 時に 1 度だけ呼ばれるコールバックを登録する。"""
        self._on_exit.append(cb)

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    # ---- producer side ----
    def _post(self, event: E) -> None:
        with self._lock:
            if self._closed:
                raise EventLoopClosed("event loop no longer exists")
            self._inbox.put(event)
        if self._notify is not None:
            self._notify()

    # ---- consumer side ----
    def dispatch(self, event: E) -> None:
        """1 件を同期的に処理する。終了後は何もしない。"""
        if self.closed or self._handler is None:
            return
        self._handler(event)

    def tick(self, dt: float) -> None:
        """受信箱を空になるまで排出する（終了した時点で残りは捨てる）。"""
        while not self.closed:
            try:
                event = self._inbox.get_nowait()
            except Empty:
                break
            self.dispatch(event)

    def exit(self) -> None:
        """ループを閉じる。以降の送信は失敗し、ディスパッチは行われない。"""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        # 取り残しは消費しない
        while True:
            try:
                self._inbox.get_nowait()
            except Empty:
                break
        callbacks, self._on_exit = self._on_exit, []
        for cb in callbacks:
            cb()
        logger.debug("event loop closed")


__all__ = ["EventLoopClosed", "EventLoopProxy", "EventLoop"]
