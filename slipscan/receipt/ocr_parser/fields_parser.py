"""Store/date/payment/summary amount extraction helpers."""

import re
from collections.abc import Callable
from datetime import date, datetime

from slipscan.domain.receipt import UNKNOWN_STORE, PaymentMethod

from .common import DATE_PATTERNS, PHONE_PATTERN, TIME_PATTERN, parse_amount

STORE_NAME_SCAN_LINES = 5

MAX_SUBTOTAL = 1_000_000
MAX_TAX = 100_000
MAX_TOTAL = 2_000_000

# First group with a hit anywhere in the text wins, regardless of line order.
PAYMENT_METHOD_PATTERNS = (
    (
        PaymentMethod.DIGITAL,
        re.compile(
            r"\b(?:upi|g\s?pay|google\s*pay|apple\s*pay|samsung\s*pay|paypal|paytm|phonepe|venmo|"
            r"frimi|ez\s*cash|genie|lanka\s*qr|qr\s*pay(?:ment)?|e[\s-]?wallet|wallet|mobile\s*pay(?:ment)?)\b",
            re.IGNORECASE,
        ),
    ),
    (
        PaymentMethod.CARD,
        re.compile(
            r"\b(?:visa|master\s*card|maestro|amex|american\s+express|discover|"
            r"credit|debit|card|contactless)\b",
            re.IGNORECASE,
        ),
    ),
    (
        PaymentMethod.CASH,
        re.compile(r"\b(?:cash|change\s+due)\b", re.IGNORECASE),
    ),
)

SUBTOTAL_PATTERN = re.compile(r"\bsub[\s-]?total\b", re.IGNORECASE)

TAX_PATTERN = re.compile(r"\b(?:tax(?:es)?|vat|gst|hst|pst)\b", re.IGNORECASE)
# "Total incl. VAT", "Tax included", "TAX INVOICE", "VAT Reg No" carry no tax amount.
TAX_EXCLUDE_PATTERN = re.compile(
    r"\bincl\w*|\binvoice\b|\breg(?:istration)?\b|\bno\b|#",
    re.IGNORECASE,
)

STRONG_TOTAL_PATTERN = re.compile(
    r"\bgrand\s*total\b|\bnet\s*total\b|\btotal\s*amount\b|\bamount\s*(?:payable|due)\b|^\s*total\b",
    re.IGNORECASE,
)
# Change-due, tender and total-tax lines sit near the total and repeat its shape.
STRONG_TOTAL_EXCLUDE_PATTERN = re.compile(
    r"\bchange\b|\bbalance\b|\btender(?:ed)?\b|\bcash\s*received\b|"
    r"\btotal\s*(?:items?|qty|quantity|number|no\.?\s*of|discounts?|savings?|saved|tax(?:es)?|vat|gst)\b",
    re.IGNORECASE,
)
WEAK_TOTAL_PATTERN = re.compile(r"\b(?:rs|lkr)(?![a-z])\.?|\$|\btotal\b|\bamount\b", re.IGNORECASE)
NUMERIC_ONLY_PATTERN = re.compile(r"^[\d,]*\d(?:\.\d+)?\s*(?:/=)?$")


def extract_store_name(lines: list[str]) -> str:
    """
    Extract the store name from the receipt header.

    The first line among the top few that does not start with a digit (street
    numbers, dates) and carries no phone number is taken, minus punctuation.
    """
    for line in lines[:STORE_NAME_SCAN_LINES]:
        if re.match(r"^\d", line):
            continue
        if PHONE_PATTERN.search(line):
            continue
        cleaned = re.sub(r"[^a-zA-Z0-9\s]", "", line)
        cleaned = re.sub(r"\s+", " ", cleaned).strip()
        if len(cleaned) > 2:
            return cleaned
    return UNKNOWN_STORE


def _expand_year(raw: str) -> int:
    year = int(raw)
    if len(raw) == 2:
        year = 2000 + year if year < 50 else 1900 + year
    return year


def _date_from_groups(groups: tuple[str, ...], shape: str) -> date | None:
    if shape == "iso":
        candidates = [(int(groups[0]), int(groups[1]), int(groups[2]))]
    else:
        year = _expand_year(groups[2])
        first, second = int(groups[0]), int(groups[1])
        # Month-first, then day-first for DD/MM receipts.
        candidates = [(year, first, second), (year, second, first)]

    for year, month, day in candidates:
        try:
            return date(year, month, day)
        except ValueError:
            continue
    return None


def extract_date(lines: list[str]) -> datetime | None:
    """Extract the receipt date (returns None if no date token parses)."""
    for line in lines:
        for pattern, shape in DATE_PATTERNS:
            for match in pattern.finditer(line):
                parsed = _date_from_groups(match.groups(), shape)
                if parsed is None:
                    continue
                time_match = TIME_PATTERN.search(line)
                if time_match:
                    hour, minute, second = time_match.groups()
                    return datetime(
                        parsed.year, parsed.month, parsed.day, int(hour), int(minute), int(second or 0)
                    )
                return datetime(parsed.year, parsed.month, parsed.day)
    return None


def extract_payment_method(lines: list[str]) -> PaymentMethod:
    """Detect the payment method; digital wallets beat cards, cards beat cash."""
    for method, pattern in PAYMENT_METHOD_PATTERNS:
        if any(pattern.search(line) for line in lines):
            return method
    return PaymentMethod.OTHER


def extract_subtotal(lines: list[str]) -> float | None:
    """Extract the subtotal, searching from the bottom of the receipt."""
    for line in reversed(lines):
        if not SUBTOTAL_PATTERN.search(line):
            continue
        amount = parse_amount(line)
        if amount is not None and 0 <= amount < MAX_SUBTOTAL:
            return amount
    return None


def extract_tax(lines: list[str]) -> float | None:
    """Extract the tax amount (tax, VAT, GST), searching from the bottom."""
    for line in reversed(lines):
        if not TAX_PATTERN.search(line):
            continue
        if SUBTOTAL_PATTERN.search(line) or TAX_EXCLUDE_PATTERN.search(line):
            continue
        amount = parse_amount(line)
        # Use 'is not None' since 0.0 is a valid tax amount
        if amount is not None and 0 <= amount < MAX_TAX:
            return amount
    return None


def _scan_total_tier(lines: list[str], matches: Callable[[str], bool]) -> float | None:
    for line in reversed(lines):
        if not matches(line):
            continue
        amount = parse_amount(line)
        if amount is not None and 0 < amount < MAX_TOTAL:
            return amount
    return None


def extract_total(lines: list[str]) -> float | None:
    """
    Extract the total amount.

    Three tiers, each scanned bottom-up; the first tier with an acceptable
    amount wins:
    1. strong labels (grand/net total, total amount, amount payable/due, a line
       starting with "total"), skipping change/balance/tender lines
    2. any line with a currency marker or a total/amount keyword
    3. a line that is only a number, optionally followed by "/="
    """
    tiers = (
        lambda line: bool(STRONG_TOTAL_PATTERN.search(line)) and not STRONG_TOTAL_EXCLUDE_PATTERN.search(line),
        lambda line: bool(WEAK_TOTAL_PATTERN.search(line)),
        lambda line: bool(NUMERIC_ONLY_PATTERN.match(line)),
    )
    for matches in tiers:
        amount = _scan_total_tier(lines, matches)
        if amount is not None:
            return amount
    return None
