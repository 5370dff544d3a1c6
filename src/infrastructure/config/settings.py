"""アプリケーション設定.

環境変数から読み込む。設定管理のエントリーポイントはこのモジュールのみ。
"""

from __future__ import annotations

import os

from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from src.domain.value_objects.apportionment_result import ApportionmentMethod


DEFAULT_DIRECTORY_PATH = (
    Path(__file__).resolve().parents[1] / "importers" / "data" / "constituencies.json"
)

# 環境変数名 → Settings フィールド名
_ENV_MAP: dict[str, str] = {
    "TALLY_BASE_URL": "base_url",
    "TALLY_ELECTION_PATH": "election_path",
    "TALLY_ELECTION_CODE": "election_code",
    "TALLY_ENVIRONMENT": "environment",
    "TALLY_POLL_INTERVAL": "poll_interval",
    "TALLY_MAX_CONCURRENCY": "max_concurrency",
    "TALLY_REQUEST_TIMEOUT": "request_timeout",
    "TALLY_APPORTIONMENT_METHOD": "apportionment_method",
    "TALLY_DIRECTORY_PATH": "directory_path",
    "LOG_LEVEL": "log_level",
    "SENTRY_DSN": "sentry_dsn",
}


class Settings(BaseModel):
    """開票速報ウォッチャーの設定."""

    base_url: str = "https://resultados.tse.jus.br"
    election_path: str = "ele2024"
    election_code: int = Field(default=619, gt=0)
    environment: str = "oficial"
    poll_interval: float = Field(default=60.0, gt=0)
    max_concurrency: int = Field(default=8, ge=1)
    request_timeout: float = Field(default=30.0, gt=0)
    apportionment_method: ApportionmentMethod = ApportionmentMethod.LARGEST_REMAINDER
    directory_path: Path = DEFAULT_DIRECTORY_PATH
    log_level: str = "INFO"
    sentry_dsn: str | None = None

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """環境変数から設定を生成する（未設定・空文字はデフォルト値）."""
        env = os.environ if environ is None else environ
        values = {
            field_name: env[env_name]
            for env_name, field_name in _ENV_MAP.items()
            if env.get(env_name)
        }
        return cls.model_validate(values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """設定のシングルトンを取得する."""
    return Settings.from_env()


def reload_settings() -> Settings:
    """環境変数を読み直して設定を再生成する."""
    get_settings.cache_clear()
    return get_settings()
