from __future__ import annotations

import logging

import pytest

from slipscan.runtime import get_logger, parse_log_level, set_log_level


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (logging.ERROR, logging.ERROR),
        ("debug", logging.DEBUG),
        (" WARN ", logging.WARNING),
        ("verbose", logging.INFO),
        ("", logging.INFO),
        (None, logging.INFO),
    ],
)
def test_parse_log_level(value, expected: int) -> None:
    assert parse_log_level(value) == expected


def test_get_logger_namespaces_foreign_names() -> None:
    assert get_logger("scanner").name == "slipscan.scanner"
    assert get_logger("slipscan.receipt").name == "slipscan.receipt"


def test_set_log_level_accepts_names() -> None:
    logger = logging.getLogger("slipscan")
    try:
        set_log_level("warning")
        assert logger.level == logging.WARNING
        assert logger.propagate is False
        assert logger.handlers
    finally:
        set_log_level(logging.INFO)
