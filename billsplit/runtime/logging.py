"""Logging setup for billsplit processes (CLI and receipt server).

Every module logs through a child of the ``billsplit`` logger:

    from billsplit.runtime import get_logger
    logger = get_logger(__name__)

The parsers under ``billsplit.receipt`` and ``billsplit.domain`` never log;
their callers report outcomes instead.

Environment variables:
    BILLSPLIT_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR. Default: INFO
"""

import logging
import os
import sys

DEFAULT_LOG_LEVEL = logging.INFO
LOG_LEVEL_ENV_VAR = "BILLSPLIT_LOG_LEVEL"

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

LOGGER_NAMESPACE = "billsplit"

LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}

_handler: logging.Handler | None = None


def parse_log_level(name: str | None, default: int = DEFAULT_LOG_LEVEL) -> int:
    """Map a level name (any case) to a logging level; unknown names give default."""
    if not name:
        return default
    return LEVEL_NAMES.get(name.strip().upper(), default)


def _formatter_for(level: int) -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT_DEBUG if level <= logging.DEBUG else LOG_FORMAT)


def configure_logging(level: int | None = None) -> None:
    """Attach a stderr handler to the billsplit logger, once per process.

    Args:
        level: Log level to use. If None, BILLSPLIT_LOG_LEVEL decides.
    """
    global _handler

    if _handler is not None:
        return

    if level is None:
        level = parse_log_level(os.environ.get(LOG_LEVEL_ENV_VAR))

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(_formatter_for(level))

    namespace_logger = logging.getLogger(LOGGER_NAMESPACE)
    namespace_logger.setLevel(level)
    namespace_logger.addHandler(_handler)
    namespace_logger.propagate = False


def reset_logging() -> None:
    """Detach the billsplit handler so the next configure_logging() starts over."""
    global _handler

    namespace_logger = logging.getLogger(LOGGER_NAMESPACE)
    if _handler is not None:
        namespace_logger.removeHandler(_handler)
        _handler = None
    namespace_logger.setLevel(logging.NOTSET)
    namespace_logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    """Get the billsplit logger for a module.

    Args:
        name: Module name, typically __name__

    Returns:
        Logger under the billsplit namespace
    """
    configure_logging()

    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def set_log_level(level: int) -> None:
    """Change the billsplit log level at runtime (e.g. from a --log-level flag)."""
    configure_logging(level)

    namespace_logger = logging.getLogger(LOGGER_NAMESPACE)
    namespace_logger.setLevel(level)
    for handler in namespace_logger.handlers:
        handler.setFormatter(_formatter_for(level))
