"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window の resize/draw/close 通知を、ウィンドウ ID 付きのイベント
      （`Resized`/`RedrawRequested`/`CloseRequested`）へ変換してイベントシンクへ渡す。
なぜ: アプリケーション状態機械を GUI 依存から切り離し、最小インターフェイスで扱うため。

使用例:
    win = RenderWindow(800, 600, caption="colorfield")
    win.set_event_sink(loop.dispatch)
    pyglet.app.run()
"""

from __future__ import annotations

import itertools
from typing import Any, Callable

import pyglet

from engine.runtime.events import CloseRequested, RedrawRequested, Resized, WindowEvent

_WINDOW_IDS = itertools.count(1)


class RenderWindow(pyglet.window.Window):
    def __init__(
        self, width: int, height: int, *, caption: str = "colorfield", clock: Any = None
    ):
        """リサイズ可能なウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            caption: タイトルバー文字列。
            clock: 再描画の予約先（`schedule_once`/`unschedule` を持つもの）。既定は `pyglet.clock`。
        """
        # super().__init__ 中に on_resize が飛ぶことがあるため先に用意する
        self._window_id = next(_WINDOW_IDS)
        self._sink: Callable[[WindowEvent], None] | None = None
        self._clock = clock if clock is not None else pyglet.clock
        super().__init__(width=width, height=height, caption=caption, resizable=True)

    @property
    def window_id(self) -> int:
        return self._window_id

    def set_event_sink(self, sink: Callable[[WindowEvent], None]) -> None:
        """ウィンドウイベントの送り先を登録する（通常は EventLoop.dispatch）。"""
        self._sink = sink

    def inner_size(self) -> tuple[int, int]:
        """描画領域のピクセル寸法（HiDPI ではフレームバッファ寸法）。"""
        w, h = self.get_framebuffer_size()
        return int(w), int(h)

    def request_redraw(self) -> None:
        """次のループ反復で 1 回描画する（未実行の予約があればまとめる）。"""
        self._clock.unschedule(self._draw_once)
        self._clock.schedule_once(self._draw_once, 0)

    def _draw_once(self, dt: float) -> None:
        self.draw(dt)

    def close(self):
        self._clock.unschedule(self._draw_once)
        super().close()

    def _emit(self, event: WindowEvent) -> None:
        if self._sink is not None:
            self._sink(event)

    # ---- pyglet イベントハンドラ ----
    def on_resize(self, width, height):  # Pyglet 既定のイベント名
        # ビューポート/射影の更新は既定実装に任せる
        super().on_resize(width, height)
        fb_w, fb_h = self.inner_size()
        self._emit(Resized(self._window_id, fb_w, fb_h))

    def on_draw(self):
        self.clear()
        self._emit(RedrawRequested(self._window_id))

    def on_close(self):
        # 実際のクローズはアプリケーション側の終了処理に委ねる
        self._emit(CloseRequested(self._window_id))


__all__ = ["RenderWindow"]
