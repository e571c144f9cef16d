from __future__ import annotations

import logging
import sys
from types import SimpleNamespace

import pytest

import api.field_runner.window as window_mod
from api import run_field
from engine.render.surface import SurfaceError


class _Window:
    window_id = 3

    def __init__(self) -> None:
        self.closed = False

    def inner_size(self) -> tuple[int, int]:
        return 4, 2

    def request_redraw(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True


def _fake_pyglet(run_calls: list[float], exits: list[int]) -> SimpleNamespace:
    # ウィンドウ/GL を使わない最小限の pyglet 互換オブジェクト
    app = SimpleNamespace(
        platform_event_loop=SimpleNamespace(notify=lambda: None),
        exit=lambda: exits.append(1),
        run=run_calls.append,
    )
    clock = SimpleNamespace(schedule=lambda func: None, unschedule=lambda func: None)
    return SimpleNamespace(app=app, clock=clock)


def test_surface_failure_during_init_exits_with_status_1(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    run_calls: list[float] = []
    exits: list[int] = []
    monkeypatch.setitem(sys.modules, "pyglet", _fake_pyglet(run_calls, exits))
    created: list[_Window] = []

    def _factory(width, height, *, title, sink):  # noqa: ANN001
        def _create() -> _Window:
            created.append(_Window())
            return created[-1]

        return _create

    def _bind_fails(window):  # noqa: ANN001
        raise SurfaceError("cannot allocate 4x2 buffer")

    monkeypatch.setattr(window_mod, "make_window_factory", _factory)
    monkeypatch.setattr(window_mod, "bind_pyglet_surface", _bind_fails)

    with caplog.at_level(logging.CRITICAL, logger="api.field"):
        with pytest.raises(SystemExit) as excinfo:
            run_field(window_size=(4, 2), wake_interval=60.0)

    assert excinfo.value.code == 1
    assert "fatal render surface error" in caplog.text
    # ループには入らず、終了処理は走る
    assert run_calls == []
    assert exits == [1]
    assert len(created) == 1
