"""共通フィクスチャ。

- 表示環境なしで使えるウィンドウ/プレゼンタの偽物
- 受信箱（EventLoop）と、それに結線した Application
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import numpy as np
import pytest

from engine.render.surface import PixelSurface
from engine.runtime.app import Application
from engine.runtime.event_loop import EventLoop, EventLoopProxy
from engine.runtime.events import AppEvent


@dataclass
class FakeWindow:
    """`WindowHandle` 相当。寸法はテストから直接書き換える。"""

    width: int
    height: int
    window_id: int = 1
    redraw_requests: int = 0

    def inner_size(self) -> tuple[int, int]:
        return self.width, self.height

    def request_redraw(self) -> None:
        self.redraw_requests += 1


@dataclass
class RecordingPresenter:
    """present されたフレームのコピーを記録する。"""

    frames: list[tuple[int, int, np.ndarray]] = field(default_factory=list)
    fail_with: Exception | None = None

    def present(self, pixels: np.ndarray, width: int, height: int) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.frames.append((width, height, pixels.copy()))


@pytest.fixture()
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture()
def make_window() -> Callable[..., FakeWindow]:
    def _make(width: int = 4, height: int = 2, window_id: int = 1) -> FakeWindow:
        return FakeWindow(width=width, height=height, window_id=window_id)

    return _make


@pytest.fixture()
def loop() -> EventLoop[AppEvent]:
    return EventLoop()


@dataclass
class AppHarness:
    app: Application
    loop: EventLoop[AppEvent]
    window: FakeWindow
    presenter: RecordingPresenter
    proxies: list[EventLoopProxy[AppEvent]]

    @property
    def surface(self) -> PixelSurface:
        return self.app.pane.surface


@pytest.fixture()
def make_app(
    loop: EventLoop[AppEvent], presenter: RecordingPresenter
) -> Callable[..., AppHarness]:
    """初期化済みの Application を作る（プロデューサは起動せず proxy だけ受け取る）。"""

    def _make(width: int = 4, height: int = 2, *, trace_events: bool = False) -> AppHarness:
        window = FakeWindow(width=width, height=height, window_id=7)
        proxies: list[EventLoopProxy[AppEvent]] = []
        app = Application(
            loop,
            create_window=lambda: window,
            bind_surface=lambda w: PixelSurface.bind(w, presenter),
            spawn_producer=proxies.append,
            trace_events=trace_events,
        )
        app.init()
        return AppHarness(app, loop, window, presenter, proxies)

    return _make
