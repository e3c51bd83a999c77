"""Runtime loader for store categorization rules."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from slipscan.domain.receipt import ReceiptCategory
from slipscan.domain.store_categorization import DEFAULT_STORE_CATEGORY_RULES, StoreCategoryRule
from slipscan.runtime.logging import get_logger
from slipscan.runtime.paths import get_paths

logger = get_logger(__name__)


@lru_cache(maxsize=4)
def load_project_store_category_rules(config_path: str | None = None) -> tuple[StoreCategoryRule, ...]:
    """
    Load project-level store category rules from store_categories.toml.

    Format:
        [[rules]]
        category = "groceries"
        keywords = ["corner market", "fresh mart"]

    Args:
        config_path: Optional TOML path override. If None, uses default project path.

    Returns:
        Tuple of (category, keywords) rules preserving file order; empty if
        the file does not exist.
    """
    try:
        import tomllib
    except ImportError:
        import tomli as tomllib  # type: ignore[no-redef]

    path = Path(config_path) if config_path is not None else get_paths().store_category_rules
    if not path.exists():
        return tuple()

    with open(path, "rb") as f:
        config = tomllib.load(f)

    rules: list[StoreCategoryRule] = []
    for rule in config.get("rules", []):
        raw_category = str(rule.get("category", "")).strip().lower()
        try:
            category = ReceiptCategory(raw_category)
        except ValueError:
            logger.warning("Skipping store rule with unknown category %r in %s", raw_category, path)
            continue
        keywords = tuple(str(k).strip().lower() for k in rule.get("keywords", []) if str(k).strip())
        if keywords:
            rules.append((category, keywords))

    logger.debug("Loaded %d store category rules from %s", len(rules), path)
    return tuple(rules)


def load_store_category_rules(config_path: str | None = None) -> tuple[StoreCategoryRule, ...]:
    """Project rules first, then the built-in table; first match wins."""
    return load_project_store_category_rules(config_path) + DEFAULT_STORE_CATEGORY_RULES
