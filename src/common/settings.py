"""
どこで: `common.settings`
何を: 実行時の環境変数（ログレベル/イベントトレース/起床間隔）を型付きで一元管理する。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_str


@dataclass
class _Settings:
    # ログ（None は設定ファイル/既定に従う）
    LOG_LEVEL: str | None = None
    # 全ディスパッチを DEBUG で記録
    TRACE_EVENTS: bool = False
    # 起床シグナル間隔の上書き（秒）
    WAKE_INTERVAL_SEC: float | None = None


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。"""
    _settings.LOG_LEVEL = env_str("CF_LOG_LEVEL", None)
    _settings.TRACE_EVENTS = env_bool("CF_TRACE_EVENTS", False)
    interval = env_float("CF_WAKE_INTERVAL_SEC", None)
    # 0 以下は無効値として無視
    _settings.WAKE_INTERVAL_SEC = interval if interval is not None and interval > 0 else None


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
