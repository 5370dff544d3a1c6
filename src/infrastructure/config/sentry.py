"""Sentry 初期化."""

import logging

import sentry_sdk

from sentry_sdk.integrations.logging import LoggingIntegration

from src.infrastructure.config.settings import Settings


logger = logging.getLogger(__name__)


def init_sentry(settings: Settings) -> bool:
    """SENTRY_DSN が設定されている場合のみ Sentry を初期化する.

    Returns:
        初期化した場合True
    """
    if not settings.sentry_dsn:
        logger.debug("SENTRY_DSN 未設定のため Sentry を初期化しません")
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        integrations=[
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        traces_sample_rate=0.0,
    )
    logger.info("Sentry を初期化しました")
    return True
