"""Shared pytest fixtures for slipscan tests."""

from __future__ import annotations

import pytest

from slipscan.runtime.paths import reset_paths
from slipscan.runtime.store_category_rules import load_project_store_category_rules


@pytest.fixture(autouse=True)
def isolated_project_root(tmp_path, monkeypatch):
    """Point the project root at a fresh temp directory for every test."""
    monkeypatch.setenv("SLIPSCAN_HOME", str(tmp_path))
    monkeypatch.delenv("SLIPSCAN_OCR_URL", raising=False)
    reset_paths()
    load_project_store_category_rules.cache_clear()
    yield tmp_path
    reset_paths()
    load_project_store_category_rules.cache_clear()
