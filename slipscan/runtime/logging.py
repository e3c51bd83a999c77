"""Logging setup for the slipscan namespace.

Every module asks for its logger through ``get_logger(__name__)``; the first
call attaches a single stderr handler to the ``slipscan`` logger and stops
propagation so host applications keep their own root configuration.

Environment variables:
    SLIPSCAN_LOG_LEVEL: DEBUG, INFO, WARNING (or WARN) or ERROR. Default: INFO
"""

import logging
import os
import sys

LOGGER_NAMESPACE = "slipscan"
LOG_LEVEL_ENV_VAR = "SLIPSCAN_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.INFO

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

_LEVEL_NAMES = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}

_logging_configured = False


def parse_log_level(value: int | str | None) -> int:
    """Resolve an int or level name; unknown names fall back to the default."""
    if isinstance(value, int):
        return value
    if not value:
        return DEFAULT_LOG_LEVEL
    return _LEVEL_NAMES.get(value.strip().upper(), DEFAULT_LOG_LEVEL)


def _formatter_for(level: int) -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT_DEBUG if level <= logging.DEBUG else LOG_FORMAT)


def configure_logging(level: int | str | None = None) -> None:
    """Attach the stderr handler once. ``level=None`` reads SLIPSCAN_LOG_LEVEL."""
    global _logging_configured

    if _logging_configured:
        return

    resolved = parse_log_level(level if level is not None else os.environ.get(LOG_LEVEL_ENV_VAR))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter_for(resolved))

    namespace_logger = logging.getLogger(LOGGER_NAMESPACE)
    namespace_logger.setLevel(resolved)
    namespace_logger.addHandler(handler)
    namespace_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()

    # __name__ of our own modules is already namespaced
    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def set_log_level(level: int | str) -> None:
    """Change the namespace level at runtime, switching to line numbers at DEBUG."""
    configure_logging()

    resolved = parse_log_level(level)
    namespace_logger = logging.getLogger(LOGGER_NAMESPACE)
    namespace_logger.setLevel(resolved)
    for handler in namespace_logger.handlers:
        handler.setFormatter(_formatter_for(resolved))
