"""Pure helpers for mapping a store name to a spending category."""

from __future__ import annotations

from slipscan.domain.receipt import UNKNOWN_STORE, ReceiptCategory

StoreCategoryRule = tuple[ReceiptCategory, tuple[str, ...]]

# Checked in order; first category with a keyword contained in the store name wins.
DEFAULT_STORE_CATEGORY_RULES: tuple[StoreCategoryRule, ...] = (
    (
        ReceiptCategory.GROCERIES,
        (
            "grocery",
            "market",
            "food",
            "supermarket",
            "walmart",
            "target",
            "kroger",
            "safeway",
            "whole foods",
            "keells",
            "cargills",
            "food city",
            "arpico",
            "glomark",
            "sathosa",
            "laugfs super",
            "spar",
            "aldi",
            "lidl",
        ),
    ),
    (
        ReceiptCategory.RESTAURANT,
        (
            "restaurant",
            "cafe",
            "coffee",
            "pizza",
            "burger",
            "taco",
            "mcdonald",
            "subway",
            "starbucks",
            "kfc",
            "bakery",
            "bistro",
            "kitchen",
            "java lounge",
            "hotel",
        ),
    ),
    (
        ReceiptCategory.GAS,
        (
            "gas",
            "fuel",
            "shell",
            "bp",
            "exxon",
            "chevron",
            "mobil",
            "petrol",
            "filling station",
            "ceypetco",
            "lanka ioc",
        ),
    ),
    (
        ReceiptCategory.PHARMACY,
        (
            "pharmacy",
            "cvs",
            "walgreens",
            "rite aid",
            "drugstore",
            "chemist",
            "healthguard",
            "osu sala",
        ),
    ),
    (
        ReceiptCategory.RETAIL,
        (
            "store",
            "shop",
            "retail",
            "amazon",
            "best buy",
            "costco",
            "odel",
            "abans",
            "singer",
            "softlogic",
            "fashion",
        ),
    ),
)


def categorize_store(
    store_name: str,
    *,
    rules: tuple[StoreCategoryRule, ...] | list[StoreCategoryRule] | None = None,
) -> ReceiptCategory:
    """Return the category of the first rule whose keyword appears in the store name."""
    if rules is None:
        rules = DEFAULT_STORE_CATEGORY_RULES
    if store_name == UNKNOWN_STORE:
        return ReceiptCategory.OTHER

    name_lower = store_name.lower()
    for category, keywords in rules:
        if any(keyword in name_lower for keyword in keywords):
            return category
    return ReceiptCategory.OTHER
