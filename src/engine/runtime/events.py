"""
どこで: `engine.runtime` のイベント型。
何を: ディスパッチャが扱うイベント（WakeSignal/Resized/RedrawRequested/CloseRequested）。
なぜ: プラットフォーム（pyglet）や別スレッドから届く通知を、型で判別できる値に統一するため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(slots=True, frozen=True)
class WakeSignal:
    """ペイロードを持たない起床トークン（別スレッド → イベントループ）。"""


@dataclass(slots=True, frozen=True)
class Resized:
    window_id: int
    width: int
    height: int


@dataclass(slots=True, frozen=True)
class RedrawRequested:
    window_id: int


@dataclass(slots=True, frozen=True)
class CloseRequested:
    window_id: int


WindowEvent = Union[Resized, RedrawRequested, CloseRequested]
AppEvent = Union[WakeSignal, WindowEvent]


__all__ = [
    "WakeSignal",
    "Resized",
    "RedrawRequested",
    "CloseRequested",
    "WindowEvent",
    "AppEvent",
]
