"""
どこで: `engine.render` の画面転送。
何を: uint32（0xAARRGGBB）行優先バッファを `pyglet.image.ImageData` に包んでウィンドウへ blit。
なぜ: サーフェス（CPU バッファ管理）と pyglet 依存の転送処理を分離するため。
"""

from __future__ import annotations

import sys

import numpy as np
import pyglet


def _pixel_format() -> str:
    """uint32 のメモリ上のバイト順に対応する pyglet のフォーマット文字列。"""
    # 0xAARRGGBB はリトルエンディアンでは B,G,R,A の順に並ぶ
    return "BGRA" if sys.byteorder == "little" else "ARGB"


class PygletPresenter:
    """バッファをウィンドウ全面へ描く。`on_draw` 中（GL コンテキスト有効時）に呼ぶこと。"""

    def __init__(self, window: pyglet.window.Window):
        self._window = window
        self._format = _pixel_format()

    def present(self, pixels: np.ndarray, width: int, height: int) -> None:
        data = np.ascontiguousarray(pixels, dtype=np.uint32).tobytes()
        # 負の pitch で「先頭行が画面上端」を表す（pyglet の既定は下端から）
        image = pyglet.image.ImageData(width, height, self._format, data, pitch=-width * 4)
        image.blit(0, 0, width=self._window.width, height=self._window.height)


__all__ = ["PygletPresenter"]
