"""Logging configuration helpers."""

import logging

from intranet_core_lib.impl.settings.logging_settings import LoggingSettings


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure the root logger from settings."""
    settings = settings or LoggingSettings()
    logging.basicConfig(level=settings.level.upper(), format=settings.format)
