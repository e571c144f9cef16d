"""
どこで: `engine.render` の CPU ピクセルサーフェス。
何を: ウィンドウに束縛された `width*height` 個の 32bit セル（uint32, 行優先）を保持し、
      リサイズ・スコープ付きの書き込みビュー取得・画面への present を提供する。
なぜ: バッファ寸法とウィンドウ寸法の同期、および「取得したビューは必ず present で解放」
      という寿命規則を 1 か所に閉じ込めるため。

寿命規則:
- 同時に有効なビューは 1 つまで。`present()` がビューの唯一の出口。
- `buffer_mut()` は with 文で使い、描画が途中で例外を出しても present を保証する。
- present 後のビューに触れると `SurfaceError`。
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Protocol

import numpy as np

logger = logging.getLogger(__name__)


class SurfaceError(RuntimeError):
    """サーフェスの確保/取得/present に失敗した（回復不能）。"""


class WindowLike(Protocol):
    """サーフェスが参照するウィンドウ側の最小インターフェース。"""

    @property
    def window_id(self) -> int: ...

    def inner_size(self) -> tuple[int, int]: ...


class Presenter(Protocol):
    """ピクセル列を画面へ転送する外部協調者。"""

    def present(self, pixels: np.ndarray, width: int, height: int) -> None: ...


class BufferView:
    """`PixelSurface` の書き込み可能ビュー（present まで有効）。"""

    def __init__(self, surface: "PixelSurface", pixels: np.ndarray, width: int, height: int):
        self._surface = surface
        self._pixels: np.ndarray | None = pixels
        self.width = width
        self.height = height

    @property
    def released(self) -> bool:
        return self._pixels is None

    @property
    def pixels(self) -> np.ndarray:
        """行優先 `index = y*width + x` の 1 次元 uint32 配列。"""
        if self._pixels is None:
            raise SurfaceError("buffer view used after present()")
        return self._pixels

    def __len__(self) -> int:
        return self.width * self.height

    def present(self) -> None:
        """内容を画面へ確定し、ビューを解放する。"""
        if self._pixels is None:
            raise SurfaceError("buffer view already presented")
        pixels = self._pixels
        self._pixels = None
        self._surface._present(pixels, self.width, self.height)


class PixelSurface:
    """ウィンドウに束縛された CPU ピクセルバッファ。"""

    def __init__(self, window: WindowLike, presenter: Presenter):
        self._window = window
        self._presenter = presenter
        self._width = 0
        self._height = 0
        self._pixels: np.ndarray | None = None
        self._view: BufferView | None = None
        self.present_count = 0

        width, height = window.inner_size()
        if width > 0 and height > 0:
            self.resize(width, height)

    @classmethod
    def bind(cls, window: WindowLike, presenter: Presenter) -> "PixelSurface":
        """`window` に束縛したサーフェスを生成する。"""
        return cls(window, presenter)

    # ---- properties ----
    @property
    def window(self) -> WindowLike:
        return self._window

    @property
    def size(self) -> tuple[int, int]:
        return self._width, self._height

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def acquired(self) -> bool:
        return self._view is not None

    # ---- operations ----
    def resize(self, width: int, height: int) -> None:
        """バッファを `width*height` セルへ確保し直す。

        0 以下の寸法は契約違反として `SurfaceError`（呼び出し側で除外すること）。
        同じ寸法への再リサイズは既存バッファを維持する。
        """
        w, h = int(width), int(height)
        if w <= 0 or h <= 0:
            raise SurfaceError(f"surface dimensions must be positive, got {w}x{h}")
        if self._view is not None:
            raise SurfaceError("cannot resize while a buffer view is acquired")
        if self._pixels is not None and (w, h) == (self._width, self._height):
            return
        try:
            pixels = np.zeros(w * h, dtype=np.uint32)
        except (MemoryError, ValueError) as e:
            raise SurfaceError(f"failed to allocate {w}x{h} pixel buffer") from e
        self._pixels = pixels
        self._width, self._height = w, h
        logger.debug("surface resized to %dx%d", w, h)

    def acquire_buffer(self) -> BufferView:
        """現寸法の書き込みビューを取得する（必ず `present()` で解放すること）。"""
        if self._view is not None:
            raise SurfaceError("buffer view already acquired")
        if self._pixels is None:
            raise SurfaceError("surface has no buffer (window never had a positive size)")
        self._view = BufferView(self, self._pixels, self._width, self._height)
        return self._view

    @contextmanager
    def buffer_mut(self) -> Iterator[BufferView]:
        """スコープ付きビュー。with ブロックを抜けると（例外時も）present する。"""
        view = self.acquire_buffer()
        try:
            yield view
        finally:
            if not view.released:
                view.present()

    def _present(self, pixels: np.ndarray, width: int, height: int) -> None:
        try:
            self._presenter.present(pixels, width, height)
        except SurfaceError:
            raise
        except Exception as e:
            raise SurfaceError(f"failed to present {width}x{height} buffer: {e}") from e
        finally:
            # presenter が失敗しても取得状態は残さない
            self._view = None
        self.present_count += 1


__all__ = ["SurfaceError", "Presenter", "BufferView", "PixelSurface"]
