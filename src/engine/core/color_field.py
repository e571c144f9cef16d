"""
どこで: `engine.core` のカラーフィールド生成。
何を: 画素座標とフレーム寸法から RGB を決める純関数 `color()` と、行優先バッファ全体を
      一括で塗る `fill_color_field()`（NumPy ベクトル化）を提供。
なぜ: 描画ループ/サーフェスから色計算を切り離し、決定的でテスト可能な形にするため。

色の定義:
- R: 縦方向の線形ランプ `y/height * 255`
- G: 横方向の線形ランプ `x/width * 120`
- B: 左上隅からの距離に対する同心円状のコサインリング（窓サイズに依存しない）

各チャネルは単精度（float32）で計算し、四捨五入ではなく切り捨てで 8bit に変換する。
リング境界付近の B は倍精度と 1 ずれることがあるため、スカラー版も同じ float32 カーネルを通す。
"""

from __future__ import annotations

import math

import numpy as np

BANDWIDTH = np.float32(20.0)
R_DEPTH = np.float32(255.0)
G_DEPTH = np.float32(120.0)
B_DEPTH = np.float32(160.0)
TAU = np.float32(math.tau)
ALPHA = 0xFF

_HALF = np.float32(0.5)
_TWO = np.float32(2.0)

RGB = tuple[int, int, int]


def _channels(
    xs: np.ndarray, ys: np.ndarray, width: int, height: int
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    # 演算順は `sqrt(x*x + y*y) * TAU / BANDWIDTH` で固定（丸めが変わるため入れ替えない）
    w = np.float32(width)
    h = np.float32(height)
    r = ys / h * R_DEPTH
    g = xs / w * G_DEPTH
    radius = np.sqrt(xs * xs + ys * ys)
    b = (np.cos(radius * TAU / BANDWIDTH) / _TWO + _HALF) * B_DEPTH
    # astype(uint32) は 0 方向への切り捨て（値域は非負）
    return r.astype(np.uint32), g.astype(np.uint32), b.astype(np.uint32)


def color(x: int, y: int, width: int, height: int) -> RGB:
    """画素 (x, y) の色を返す。

    前提: `0 <= x < width`, `0 <= y < height`, `width, height > 0`（呼び出し側が保証）。
    """
    xs = np.array([x], dtype=np.float32)
    ys = np.array([y], dtype=np.float32)
    r, g, b = _channels(xs, ys, width, height)
    return int(r[0]), int(g[0]), int(b[0])


def pack_argb(r: int, g: int, b: int) -> int:
    """RGB を `0xAARRGGBB`（A=0xFF）の 32bit 値へ詰める。"""
    return (ALPHA << 24) | ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def unpack_argb(value: int) -> RGB:
    """`pack_argb` の逆変換（アルファは捨てる）。"""
    v = int(value)
    return (v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF


def fill_color_field(pixels: np.ndarray, width: int, height: int) -> None:
    """行優先バッファ `pixels`（長さ width*height, uint32）を全セル 1 回ずつ塗る。

    index → 座標は `x = index % width`, `y = index // width` で分解する。
    計算は `color()` と同じカーネルを通すため、全セルがスカラー版と一致する。
    """
    count = int(width) * int(height)
    if pixels.shape != (count,):
        raise ValueError(f"pixel buffer shape {pixels.shape} does not match {width}x{height}")
    if count == 0:
        return

    index = np.arange(count, dtype=np.int64)
    xs = (index % width).astype(np.float32)
    ys = (index // width).astype(np.float32)
    r, g, b = _channels(xs, ys, width, height)

    packed = np.uint32(ALPHA << 24)
    packed = packed | (r << np.uint32(16))
    packed = packed | (g << np.uint32(8))
    packed = packed | b
    pixels[:] = packed


def render_color_field(width: int, height: int) -> np.ndarray:
    """新しいバッファを確保して `fill_color_field` した結果を返す（テスト/書き出し用）。"""
    out = np.empty(int(width) * int(height), dtype=np.uint32)
    fill_color_field(out, width, height)
    return out


__all__ = [
    "BANDWIDTH",
    "color",
    "pack_argb",
    "unpack_argb",
    "fill_color_field",
    "render_color_field",
]
