"""
どこで: `api.field`（実行ランナー）。
何を: カラーフィールドを描き続けるウィンドウを 1 枚開き、別スレッドからの起床シグナルを
      イベントループへ注入しながら pyglet のループを回す。
なぜ: 「応答性を保つ UI ループ」「ウィンドウと同期してリサイズされるピクセルバッファ」
      「ループをブロックせずにイベントを注入する外部スレッド」の結線を 1 関数で提供するため。

実行フロー（概要）:
1) 設定解決: `configs/default.yaml`（+ ルート `config.yaml`）と環境変数から
   ウィンドウ寸法/タイトル/FPS/起床間隔/ログレベルを確定。
2) イベントループ: 受信箱 `EventLoop` を生成。送信時の起床フックに
   `pyglet.app.platform_event_loop.notify`、終了時のフックに `pyglet.app.exit` を結線。
3) 初期化: `Application.init()` がウィンドウ（RenderWindow）・サーフェス（PixelSurface）を
   生成し、`WakeProducer` を起動する。
4) 駆動: `FrameClock.attach(pyglet.clock)` で毎反復 `tick` → 受信箱の排出（継続ポーリング）。
   再描画は `pyglet.app.run(1/fps)` の間隔で on_draw → RedrawRequested として処理される。
5) 終了: ウィンドウのクローズ要求で `Application` が TERMINATED へ遷移し、ループを閉じる。
   以後プロデューサの送信は失敗し、そのスレッドは自ら終了する。

エラー:
- `SurfaceError`（バッファ確保/取得/present の失敗）は回復不能。診断ログを 1 行出して
  終了コード 1 でプロセスを終える。

スレッド:
- pyglet のループとアプリケーション状態はメインスレッドのみが触る。
- プロデューサはデーモンスレッド。join/キャンセルはしない。
"""

from __future__ import annotations

import logging
import sys

from common import settings
from common.logging import setup_default_logging
from engine.render.surface import SurfaceError
from engine.runtime.app import Application, AppState
from engine.runtime.event_loop import EventLoop
from engine.runtime.events import AppEvent
from engine.runtime.producer import spawn_wake_producer
from util.utils import load_config

from .field_runner.utils import (
    resolve_fps,
    resolve_log_level,
    resolve_title,
    resolve_wake_interval,
    resolve_window_size,
)

logger = logging.getLogger(__name__)


def run_field(
    *,
    window_size: tuple[int, int] | None = None,
    title: str | None = None,
    fps: int | None = None,
    wake_interval: float | None = None,
    init_only: bool = False,
) -> None:
    """ウィンドウを開いてカラーフィールドを描き続ける（クローズ要求まで戻らない）。

    Parameters
    ----------
    window_size : tuple[int, int] | None
        初期ウィンドウ寸法 [px]。None で設定ファイル/既定（800x600）。
    title : str | None
        ウィンドウタイトル。None で設定ファイル/既定。
    fps : int | None
        再描画レート。None で設定ファイル/既定（60）。1 以上にクランプ。
    wake_interval : float | None
        起床シグナルの送信間隔 [sec]。None で環境変数/設定ファイル/既定（1.0）。
    init_only : bool, default False
        True で設定解決のみ行い、pyglet を import せずに戻る（ヘッドレス検証用）。
    """
    # ---- ① 設定解決 -------------------------------------------------
    cfg = load_config()
    setup_default_logging(resolve_log_level(cfg))
    width, height = resolve_window_size(window_size, cfg=cfg)
    caption = resolve_title(title, cfg=cfg)
    frame_rate = resolve_fps(fps, cfg=cfg)
    interval = resolve_wake_interval(wake_interval, cfg=cfg)

    if init_only:
        return None

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet

    from engine.core.frame_clock import FrameClock

    from .field_runner.window import bind_pyglet_surface, make_window_factory

    # ---- ② イベントループ -------------------------------------------
    loop: EventLoop[AppEvent] = EventLoop(notify=pyglet.app.platform_event_loop.notify)
    loop.add_exit_callback(pyglet.app.exit)

    # ---- ③ アプリケーション構築 ------------------------------------
    app = Application(
        loop,
        create_window=make_window_factory(width, height, title=caption, sink=loop.dispatch),
        bind_surface=bind_pyglet_surface,
        spawn_producer=lambda proxy: spawn_wake_producer(proxy, interval=interval),
        trace_events=settings.get().TRACE_EVENTS,
    )

    # ---- ④ 初期化（ウィンドウ/サーフェス/プロデューサ）と駆動 -------
    frame_clock = FrameClock([loop])
    pane = None
    try:
        # 初回バッファ確保の失敗も致命エラーとして同じ経路で扱う
        pane = app.init()
        frame_clock.attach(pyglet.clock)
        pyglet.app.run(1 / frame_rate)
    except SurfaceError:
        logger.critical("fatal render surface error; aborting", exc_info=True)
        sys.exit(1)
    finally:
        frame_clock.detach()
        # 例外経路でもループを閉じ、プロデューサに停止を伝える
        loop.exit()
        close = getattr(pane.window, "close", None) if pane is not None else None
        if callable(close):
            close()

    if app.state is not AppState.TERMINATED:
        logger.warning("event loop returned before a close request")
    return None


__all__ = ["run_field"]
