"""
どこで: `engine.runtime` のアプリケーション状態機械。
何を: ウィンドウとサーフェスの組（`Pane`）を所有し、イベントを 1 件ずつ同期処理する。
      WakeSignal → ログ / Resized → サーフェスのリサイズ＋再描画要求 /
      RedrawRequested → 全セル描画して present / CloseRequested → 終了。
なぜ: プラットフォーム層（pyglet）と描画・並行処理の結線を、表示環境なしで検証できる
      純粋な Python オブジェクトに集約するため。

状態遷移: UNINITIALIZED → RUNNING → TERMINATED（終端）。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from engine.core.color_field import fill_color_field
from engine.render.surface import PixelSurface

from .event_loop import EventLoop, EventLoopProxy
from .events import AppEvent, CloseRequested, RedrawRequested, Resized, WakeSignal

logger = logging.getLogger(__name__)


class WindowHandle(Protocol):
    @property
    def window_id(self) -> int: ...

    def inner_size(self) -> tuple[int, int]: ...

    def request_redraw(self) -> None: ...


class AppState(Enum):
    UNINITIALIZED = "uninitialized"
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass
class Pane:
    """ウィンドウと、それに束縛されたピクセルサーフェスの組。"""

    window: WindowHandle
    surface: PixelSurface


class Application:
    """イベントディスパッチャ。状態はループを所有するスレッドからのみ変更される。"""

    def __init__(
        self,
        loop: EventLoop[AppEvent],
        *,
        create_window: Callable[[], WindowHandle],
        bind_surface: Callable[[WindowHandle], PixelSurface],
        spawn_producer: Callable[[EventLoopProxy[AppEvent]], object] | None = None,
        trace_events: bool = False,
    ) -> None:
        self._loop = loop
        self._create_window = create_window
        self._bind_surface = bind_surface
        self._spawn_producer = spawn_producer
        self._trace_events = trace_events
        self._state = AppState.UNINITIALIZED
        self._pane: Pane | None = None
        self._window_id: int | None = None
        self.redraw_count = 0

    # ---- properties ----
    @property
    def state(self) -> AppState:
        return self._state

    @property
    def pane(self) -> Pane:
        if self._pane is None:
            raise RuntimeError("application is not initialized")
        return self._pane

    # ---- lifecycle ----
    def init(self) -> Pane:
        """ウィンドウ/サーフェスを生成し、プロデューサを起動する（1 度だけ）。"""
        if self._state is not AppState.UNINITIALIZED:
            raise RuntimeError(f"init() called in state {self._state.value}")
        window = self._create_window()
        # ID は生成時に 1 度だけ取得し、イベントごとに問い合わせない
        self._window_id = window.window_id
        surface = self._bind_surface(window)
        self._pane = Pane(window=window, surface=surface)
        self._loop.set_handler(self.handle)
        if self._spawn_producer is not None:
            self._spawn_producer(self._loop.create_proxy())
        self._state = AppState.RUNNING
        logger.info("application running (window %s, %dx%d)", self._window_id, *surface.size)
        return self._pane

    def handle(self, event: AppEvent | object) -> None:
        """1 イベントを同期的に処理する。"""
        if self._state is not AppState.RUNNING:
            return
        if self._trace_events:
            logger.debug("dispatch %r", event)

        if isinstance(event, WakeSignal):
            logger.info("received event")
            return
        if not isinstance(event, (Resized, RedrawRequested, CloseRequested)):
            return
        if event.window_id != self._window_id:
            return

        if isinstance(event, Resized):
            self._on_resized(event.width, event.height)
        elif isinstance(event, RedrawRequested):
            self._redraw()
        else:
            self._terminate()

    # ---- actions ----
    def _on_resized(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            # 最小化など。直前の有効なバッファを維持する
            logger.debug("ignoring degenerate resize %dx%d", width, height)
            return
        pane = self.pane
        pane.surface.resize(width, height)
        # プラットフォームの自動再描画には頼らない
        pane.window.request_redraw()

    def _redraw(self) -> None:
        surface = self.pane.surface
        if surface.size == (0, 0):
            logger.debug("skipping redraw: surface has no buffer yet")
            return
        with surface.buffer_mut() as view:
            fill_color_field(view.pixels, view.width, view.height)
        self.redraw_count += 1

    def _terminate(self) -> None:
        self._state = AppState.TERMINATED
        logger.info("close requested; stopping dispatch")
        self._loop.exit()


__all__ = ["AppState", "Pane", "Application", "WindowHandle"]
