"""CLI共通ユーティリティ."""

from __future__ import annotations

import functools
import logging

from collections.abc import Callable
from typing import Any, TypeVar

import click

from src.domain.exceptions import TallyError


F = TypeVar("F", bound=Callable[..., Any])

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """ロギングを設定する."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


def with_error_handling(func: F) -> F:
    """ドメイン例外をCLIのエラーメッセージに変換するデコレータ."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except TallyError as e:
            raise click.ClickException(str(e)) from e
        except KeyboardInterrupt:
            click.echo("\n中断しました", err=True)
            raise SystemExit(130) from None

    return wrapper  # type: ignore[return-value]
