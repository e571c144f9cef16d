"""
どこで: `api.field_runner.utils`（純粋関数/小ヘルパ）。
何を: ウィンドウ寸法/タイトル・FPS・起床間隔・ログレベルの解決を提供。
なぜ: `api.field` を薄く保ち、設定解決の優先順位をテスト可能にするため。

優先順位はいずれも「明示引数 > 環境変数（該当するもののみ）> 設定ファイル > 既定値」。
不正な設定値は既定値へ倒す（フェイルソフト）。明示引数の不正値は `ValueError`。
"""

from __future__ import annotations

from typing import Any, Mapping

from common import settings
from util.utils import config_section, load_config

DEFAULT_WINDOW_SIZE = (800, 600)
DEFAULT_TITLE = "colorfield"
DEFAULT_FPS = 60
DEFAULT_WAKE_INTERVAL = 1.0
DEFAULT_LOG_LEVEL = "INFO"


def _cfg(cfg: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return load_config() if cfg is None else cfg


def resolve_window_size(
    requested: tuple[int, int] | None, *, cfg: Mapping[str, Any] | None = None
) -> tuple[int, int]:
    """初期ウィンドウ寸法 [px] を解決する。"""
    if requested is not None:
        try:
            w, h = int(requested[0]), int(requested[1])
        except (TypeError, ValueError, IndexError) as e:
            raise ValueError(f"invalid window size: {requested!r}") from e
        if w <= 0 or h <= 0:
            raise ValueError(f"window size must be positive, got: {(w, h)}")
        return w, h
    section = config_section(_cfg(cfg), "window")
    try:
        w = int(section.get("width", DEFAULT_WINDOW_SIZE[0]))
        h = int(section.get("height", DEFAULT_WINDOW_SIZE[1]))
    except (TypeError, ValueError):
        return DEFAULT_WINDOW_SIZE
    if w <= 0 or h <= 0:
        return DEFAULT_WINDOW_SIZE
    return w, h


def resolve_title(requested: str | None, *, cfg: Mapping[str, Any] | None = None) -> str:
    if requested:
        return str(requested)
    title = config_section(_cfg(cfg), "window").get("title")
    return str(title) if isinstance(title, str) and title else DEFAULT_TITLE


def resolve_fps(requested: int | None, *, cfg: Mapping[str, Any] | None = None) -> int:
    """再描画レートを 1 以上の int で返す。"""
    if requested is not None:
        try:
            return max(1, int(requested))
        except (TypeError, ValueError):
            return DEFAULT_FPS
    raw = config_section(_cfg(cfg), "runtime").get("fps", DEFAULT_FPS)
    try:
        return max(1, int(raw))
    except (TypeError, ValueError):
        return DEFAULT_FPS


def resolve_wake_interval(
    requested: float | None, *, cfg: Mapping[str, Any] | None = None
) -> float:
    """起床シグナルの送信間隔 [sec] を正の float で返す。"""
    if requested is not None:
        value = float(requested)
        if value <= 0:
            raise ValueError(f"wake interval must be > 0, got {requested}")
        return value
    env_value = settings.get().WAKE_INTERVAL_SEC
    if env_value is not None:
        return float(env_value)
    raw = config_section(_cfg(cfg), "runtime").get("wake_interval_sec", DEFAULT_WAKE_INTERVAL)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_WAKE_INTERVAL
    return value if value > 0 else DEFAULT_WAKE_INTERVAL


def resolve_log_level(cfg: Mapping[str, Any] | None = None) -> str:
    env_level = settings.get().LOG_LEVEL
    if env_level:
        return env_level
    level = config_section(_cfg(cfg), "logging").get("level")
    return str(level) if isinstance(level, str) and level else DEFAULT_LOG_LEVEL


__all__ = [
    "resolve_window_size",
    "resolve_title",
    "resolve_fps",
    "resolve_wake_interval",
    "resolve_log_level",
]
