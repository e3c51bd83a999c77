"""Shared constants and helpers for OCR receipt parsing."""

import re

# Item price bounds (exclusive); anything outside is an OCR artifact.
MAX_ITEM_PRICE = 50_000

# Currency markers stripped before reading a number ("Rs", "Rs.", "LKR", "$").
CURRENCY_PATTERN = re.compile(r"\b(?:rs|lkr)(?![a-z])\.?|\$", re.IGNORECASE)

# Grouped numbers first so "3,410.00" and lakh-grouped "1,00,000.00" are read as one token.
AMOUNT_TOKEN_PATTERN = re.compile(r"\d{1,2}(?:,\d{2})+,\d{3}(?:\.\d+)?|\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?")

# A decimal money value somewhere in the line ("12.50", "1,200.00").
DECIMAL_AMOUNT_PATTERN = re.compile(r"\d\.\d{1,2}\b")

# A line carrying nothing but an amount: "Rs. 1,250.00", "$3.99", "450.00", "450/="
PRICE_ONLY_PATTERN = re.compile(
    r"^(?:(?:rs\.?|lkr)\s*|\$\s*)[\d,]*\d(?:\.\d{1,2})?\s*(?:/=)?$"
    r"|^[\d,]*\d\.\d{1,2}\s*(?:/=)?$"
    r"|^[\d,]*\d\s*/=$",
    re.IGNORECASE,
)

PHONE_PATTERN = re.compile(
    r"(?<![\d.])\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}(?![\d.])"
    r"|(?<![\d.])0\d{2}[\s-]?\d{7}(?![\d.])"
)

# Date shapes in lookup order: slashes, hyphens, ISO.
DATE_PATTERNS = (
    (re.compile(r"(?<!\d)(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})(?!\d)"), "day_month"),
    (re.compile(r"(?<!\d)(\d{1,2})-(\d{1,2})-(\d{4}|\d{2})(?!\d)"), "day_month"),
    (re.compile(r"(?<!\d)(\d{4})-(\d{1,2})-(\d{1,2})(?!\d)"), "iso"),
)
TIME_PATTERN = re.compile(r"(?<!\d)([01]?\d|2[0-3]):([0-5]\d)(?::([0-5]\d))?(?!\d)")

# Names that are never products.
INVALID_ITEM_NAME_PATTERNS = (
    re.compile(
        r"^(?:sub[\s-]?total|subtotal|tax|vat|gst|total|amount|change|cash|credit|debit|balance|tender)",
        re.IGNORECASE,
    ),
    re.compile(r"^\d+$"),
    re.compile(r"^[^a-zA-Z]+$"),
    re.compile(r"cashier|register|transaction|invoice|\btel\b|phone|\bdate\b", re.IGNORECASE),
)


def split_lines(text: str) -> list[str]:
    """Split raw OCR text into trimmed, non-empty lines."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def parse_amount(text: str) -> float | None:
    """
    Read the money value carried by a text fragment.

    Currency markers are removed, then the rightmost number is taken: summary
    lines put the amount after the label, and item rows end with the line amount.
    Grouping commas are dropped ("3,410.00" -> 3410.0). No bounds are applied.

    Returns:
        The amount, or None if the fragment holds no number.
    """
    if not text:
        return None
    cleaned = CURRENCY_PATTERN.sub(" ", text)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    matches = AMOUNT_TOKEN_PATTERN.findall(cleaned)
    if not matches:
        return None
    try:
        return float(matches[-1].replace(",", ""))
    except ValueError:
        return None


def is_price_only_line(line: str) -> bool:
    """Return True if the line is just an amount (optionally with currency or "/=")."""
    return PRICE_ONLY_PATTERN.match(line.strip()) is not None


def has_decimal_amount(line: str) -> bool:
    return DECIMAL_AMOUNT_PATTERN.search(line) is not None


def looks_like_date_line(line: str) -> bool:
    """Return True if the line carries a date or clock time token."""
    if TIME_PATTERN.search(line):
        return True
    return any(pattern.search(line) for pattern, _ in DATE_PATTERNS)


def is_valid_item_name(text: str) -> bool:
    """Return True if text can plausibly name a product."""
    if not text or len(text.strip()) < 2:
        return False
    text = text.strip()
    return not any(pattern.search(text) for pattern in INVALID_ITEM_NAME_PATTERNS)


def strip_leading_receipt_codes(text: str) -> str:
    """Remove leading quantity/SKU prefixes from an OCR item line."""
    if not text:
        return text
    cleaned = text.strip()
    # Optional quantity prefix like "(2)" often precedes SKU on grocery receipts.
    cleaned = re.sub(r"^\(\d+\)\s*", "", cleaned)
    # Remove long leading SKU codes.
    cleaned = re.sub(r"^\d{6,}\s*", "", cleaned)
    return cleaned.strip()


def clean_item_name(name: str) -> str:
    """Normalize an item name: punctuation to spaces, collapsed whitespace, title case."""
    cleaned = re.sub(r"[^\w\s]", " ", name)
    cleaned = re.sub(r"\s+", " ", cleaned).strip().lower()
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), cleaned)
