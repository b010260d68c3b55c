"""Runtime infrastructure for the billsplit project.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Provider settings via get_settings(), RuntimeSettings

Usage:
    from billsplit.runtime import get_logger, get_settings

    logger = get_logger(__name__)
    settings = get_settings()
    print(settings.model, settings.timeout)
"""

from billsplit.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    parse_log_level,
    reset_logging,
    set_log_level,
)
from billsplit.runtime.settings import (
    RuntimeSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "parse_log_level",
    "reset_logging",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Settings
    "get_settings",
    "reset_settings",
    "RuntimeSettings",
]
