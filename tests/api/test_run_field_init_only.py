from __future__ import annotations

import sys

import pytest

from api import run, run_field


def test_run_field_init_only_headless() -> None:
    """`init_only=True` なら pyglet の import/Window 作成前に早期 return する。"""
    assert run_field(window_size=(100, 80), fps=30, wake_interval=0.5, init_only=True) is None


def test_run_alias_is_run_field() -> None:
    assert run is run_field


def test_init_only_avoids_pyglet_import(monkeypatch: pytest.MonkeyPatch) -> None:
    # pyglet が無い環境を模擬しても init_only=True なら ImportError は起きない
    monkeypatch.setitem(sys.modules, "pyglet", None)
    assert run_field(init_only=True) is None


def test_invalid_window_size_is_rejected_before_window_creation() -> None:
    with pytest.raises(ValueError):
        run_field(window_size=(0, 10), init_only=True)
