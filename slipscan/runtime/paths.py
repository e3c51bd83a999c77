"""Centralized path management for slipscan.

This module provides a single source of truth for configuration and
receipt storage locations.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


def _get_project_root() -> Path:
    """Determine the project root directory.

    SLIPSCAN_HOME wins; otherwise the current working directory is used so the
    CLI operates on the directory it is run from.
    """
    env_root = os.environ.get("SLIPSCAN_HOME", "").strip()
    if env_root:
        return Path(env_root).expanduser()
    return Path.cwd()


@dataclass
class ProjectPaths:
    """Container for all project-related paths.

    All paths are computed relative to the project root.
    """

    root: Path = field(default_factory=_get_project_root)

    def __post_init__(self) -> None:
        self.root = self.root.resolve()

    # --- Configuration paths ---
    @property
    def config(self) -> Path:
        """Configuration directory (config/)."""
        return self.root / "config"

    @property
    def store_category_rules(self) -> Path:
        """Project-level store categorization rules TOML file."""
        return self.config / "store_categories.toml"

    # --- Receipt paths ---
    @property
    def receipts(self) -> Path:
        """Root receipts directory."""
        return self.root / "receipts"

    @property
    def receipts_records(self) -> Path:
        """Processed and failed receipt records (JSON)."""
        return self.receipts / "records"

    @property
    def receipts_ocr_text(self) -> Path:
        """Raw OCR text kept for debugging."""
        return self.receipts / "ocr_text"


_paths: ProjectPaths | None = None


def get_paths() -> ProjectPaths:
    """Get the singleton ProjectPaths instance."""
    global _paths
    if _paths is None:
        _paths = ProjectPaths()
    return _paths


def reset_paths() -> None:
    """Drop the cached ProjectPaths so the next get_paths() re-reads the environment."""
    global _paths
    _paths = None
