"""Optional Sentry error reporting for walkthrough runs."""

from __future__ import annotations

import logging

import sentry_sdk
from loguru import logger
from sentry_sdk.integrations.logging import LoggingIntegration

from blobtour import APP_VERSION
from blobtour.settings import SentrySettings, get_settings

_sentry_configured = False


def init_sentry(settings: SentrySettings | None = None) -> bool:
    """Initialise Sentry when a DSN is configured. Returns True if it did."""
    global _sentry_configured

    if _sentry_configured:
        return True
    settings = settings or get_settings().sentry
    if not settings.enabled:
        logger.debug("Sentry DSN not set; Sentry disabled")
        return False

    sentry_sdk.init(
        dsn=settings.dsn,
        integrations=[
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        traces_sample_rate=0.0,
        environment=settings.environment or "local",
        release=APP_VERSION,
    )
    _sentry_configured = True
    logger.info("Sentry initialised env={}", settings.environment or "local")
    return True


__all__ = ["init_sentry"]
