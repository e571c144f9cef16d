"""
どこで: `api.field_runner.window`
何を: RenderWindow（pyglet）の生成とイベントシンク結線、PixelSurface の束縛を行う
      ファクトリを提供する。
なぜ: `api.field` を薄くし、pyglet 依存の初期化を遅延 import で 1 か所にまとめるため。
"""

from __future__ import annotations

from typing import Callable

from engine.render.surface import PixelSurface
from engine.runtime.app import WindowHandle
from engine.runtime.events import WindowEvent


def make_window_factory(
    width: int, height: int, *, title: str, sink: Callable[[WindowEvent], None]
) -> Callable[[], WindowHandle]:
    """`Application.init()` から呼ばれるウィンドウ生成関数を返す。"""

    def _create():
        from engine.core.render_window import RenderWindow

        window = RenderWindow(width, height, caption=title)
        window.set_event_sink(sink)
        return window

    return _create


def bind_pyglet_surface(window: WindowHandle) -> PixelSurface:
    """ウィンドウに PygletPresenter 付きの PixelSurface を束縛する。"""
    from engine.render.presenter import PygletPresenter

    return PixelSurface.bind(window, PygletPresenter(window))


__all__ = ["make_window_factory", "bind_pyglet_surface"]
