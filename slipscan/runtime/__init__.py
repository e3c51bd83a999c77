"""Runtime infrastructure for slipscan.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Path resolution via get_paths(), ProjectPaths
- Store category rule loading via load_store_category_rules()

Usage:
    from slipscan.runtime import get_logger, get_paths

    logger = get_logger(__name__)
    paths = get_paths()
    print(paths.root, paths.receipts_records)
"""

from slipscan.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    parse_log_level,
    set_log_level,
)
from slipscan.runtime.paths import ProjectPaths, get_paths, reset_paths
from slipscan.runtime.store_category_rules import (
    load_project_store_category_rules,
    load_store_category_rules,
)

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "parse_log_level",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Rules
    "load_project_store_category_rules",
    "load_store_category_rules",
    # Paths
    "get_paths",
    "reset_paths",
    "ProjectPaths",
]
