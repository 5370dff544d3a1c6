"""
Configuration module for the tally watcher.

設定管理の一元化モジュール。settings.pyが唯一のエントリーポイント。
"""

from src.infrastructure.config.sentry import init_sentry
from src.infrastructure.config.settings import (
    DEFAULT_DIRECTORY_PATH,
    Settings,
    get_settings,
    reload_settings,
)


__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "reload_settings",
    "DEFAULT_DIRECTORY_PATH",
    # Sentry
    "init_sentry",
]
