from __future__ import annotations

import pytest

from slipscan.domain.receipt import UNKNOWN_STORE, ReceiptCategory
from slipscan.domain.store_categorization import DEFAULT_STORE_CATEGORY_RULES, categorize_store
from slipscan.runtime.store_category_rules import (
    load_project_store_category_rules,
    load_store_category_rules,
)


def test_load_store_category_rules_from_toml(tmp_path) -> None:
    rules_path = tmp_path / "store_categories.toml"
    rules_path.write_text(
        """
[[rules]]
category = "restaurant"
keywords = ["Corner Deli", "  Hopper Hut "]

[[rules]]
category = "spaceships"
keywords = ["launchpad"]

[[rules]]
category = "pharmacy"
keywords = []
"""
    )

    load_project_store_category_rules.cache_clear()
    rules = load_project_store_category_rules(str(rules_path))

    assert rules == ((ReceiptCategory.RESTAURANT, ("corner deli", "hopper hut")),)


def test_project_rules_are_checked_before_defaults(tmp_path) -> None:
    rules_path = tmp_path / "store_categories.toml"
    rules_path.write_text('[[rules]]\ncategory = "restaurant"\nkeywords = ["deli market"]\n')

    load_project_store_category_rules.cache_clear()
    rules = load_store_category_rules(str(rules_path))

    assert len(rules) == len(DEFAULT_STORE_CATEGORY_RULES) + 1
    assert categorize_store("Corner Deli Market", rules=rules) is ReceiptCategory.RESTAURANT
    assert categorize_store("Corner Deli Market") is ReceiptCategory.GROCERIES


def test_missing_rules_file_means_defaults_only(tmp_path) -> None:
    load_project_store_category_rules.cache_clear()

    assert load_project_store_category_rules(str(tmp_path / "missing.toml")) == ()
    assert load_store_category_rules(str(tmp_path / "missing.toml")) == DEFAULT_STORE_CATEGORY_RULES


def test_default_path_comes_from_project_root(isolated_project_root) -> None:
    config_dir = isolated_project_root / "config"
    config_dir.mkdir()
    (config_dir / "store_categories.toml").write_text('[[rules]]\ncategory = "gas"\nkeywords = ["lanka filling"]\n')

    load_project_store_category_rules.cache_clear()

    assert load_project_store_category_rules() == ((ReceiptCategory.GAS, ("lanka filling",)),)


@pytest.mark.parametrize(
    ("store_name", "expected"),
    [
        ("Keells Super", ReceiptCategory.GROCERIES),
        ("CARGILLS FOOD CITY", ReceiptCategory.GROCERIES),
        ("Pizza Hut", ReceiptCategory.RESTAURANT),
        ("Shell Station", ReceiptCategory.GAS),
        ("Healthguard Pharmacy", ReceiptCategory.PHARMACY),
        ("ODEL", ReceiptCategory.RETAIL),
        ("Acme Widgets", ReceiptCategory.OTHER),
        (UNKNOWN_STORE, ReceiptCategory.OTHER),
    ],
)
def test_categorize_store_with_default_rules(store_name: str, expected: ReceiptCategory) -> None:
    assert categorize_store(store_name) is expected


def test_first_matching_category_wins() -> None:
    # "food" (groceries) and "kitchen" (restaurant) both match; groceries is checked first.
    assert categorize_store("Food Kitchen") is ReceiptCategory.GROCERIES
