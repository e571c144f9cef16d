from __future__ import annotations

import pytest

pytest.importorskip("pyglet")
try:
    from engine.core.render_window import RenderWindow
except Exception as e:  # pragma: no cover - X11/GL が無い環境
    pytest.skip(f"pyglet window backend unavailable: {e}", allow_module_level=True)

from engine.runtime.events import CloseRequested


class _FakeClock:
    def __init__(self) -> None:
        self.pending: list[tuple[object, float]] = []

    def schedule_once(self, func, delay: float) -> None:  # noqa: ANN001
        self.pending.append((func, delay))

    def unschedule(self, func) -> None:  # noqa: ANN001
        self.pending = [(f, d) for f, d in self.pending if f != func]


def _bare_window(window_id: int) -> RenderWindow:
    # 実ウィンドウ（表示環境）を作らずにハンドラだけを検証する
    win = RenderWindow.__new__(RenderWindow)
    win._window_id = window_id
    win._sink = None
    win._clock = _FakeClock()
    return win


def test_close_is_forwarded_as_event_with_window_id() -> None:
    win = _bare_window(42)
    got: list[object] = []
    win.set_event_sink(got.append)
    win.on_close()
    assert got == [CloseRequested(42)]
    assert win.window_id == 42


def test_events_without_sink_are_dropped() -> None:
    win = _bare_window(1)
    win.on_close()  # 例外にならない


def test_request_redraw_schedules_a_real_draw() -> None:
    win = _bare_window(1)
    drawn: list[float] = []
    win.draw = drawn.append
    win.request_redraw()
    assert len(win._clock.pending) == 1
    func, delay = win._clock.pending[0]
    assert delay == 0
    func(0.25)
    assert drawn == [0.25]


def test_repeated_redraw_requests_coalesce() -> None:
    win = _bare_window(1)
    win.request_redraw()
    win.request_redraw()
    assert len(win._clock.pending) == 1
