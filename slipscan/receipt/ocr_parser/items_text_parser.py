"""Text-line based receipt item extraction.

Items are read by a small state machine walking the lines top to bottom:

    OUTSIDE --table header--> INSIDE --summary/footer line--> OUTSIDE

A pending-name register holds a plausible product name seen on its own line,
so that a price on the following line can complete the item. OCR output
regularly splits a row this way.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from slipscan.domain.receipt import LineItem, ReceiptWarning

from .common import (
    MAX_ITEM_PRICE,
    PHONE_PATTERN,
    clean_item_name,
    has_decimal_amount,
    is_price_only_line,
    is_valid_item_name,
    looks_like_date_line,
    parse_amount,
    strip_leading_receipt_codes,
)

_CURRENCY = r"(?:(?:rs\.?|lkr)\s*|\$\s*)"
_AMOUNT = r"[\d,]*\d(?:\.\d+)?"
_DECIMAL_PRICE = r"\d{1,3}(?:,\d{3})+(?:\.\d{1,2})?|\d+\.\d{1,2}"
# Whole-unit prices ("Bread 5"); a leading zero marks a postcode or branch number ("Colombo 03").
_INTEGER_PRICE = r"[1-9]\d{0,4}"

# Ordered row shapes tried inside the item section.
ITEM_ROW_PATTERNS = (
    # "1 MILK 2.000 500.00 900.00": [row no] name, qty, unit price, line amount
    (
        "name_qty_price_amount",
        re.compile(
            rf"^(?:\d{{1,3}}\s+)?(?P<name>.*?[A-Za-z].*?)\s+(?P<qty>\d+(?:[.,]\d+)?)\s+"
            rf"(?P<unit>{_AMOUNT})\s+(?P<price>{_AMOUNT})$",
        ),
    ),
    # "Bread Wheat $2.49", "SUGAR 1KG Rs. 310.00", "Bread 5"
    (
        "name_price",
        re.compile(
            rf"^(?P<name>(?:\d+[A-Za-z]|[^\d\s]).*?)\s+{_CURRENCY}?(?P<price>{_DECIMAL_PRICE}|{_INTEGER_PRICE})$",
            re.IGNORECASE,
        ),
    ),
    # "Tea....120.00", "Rice: Rs.450/=", "CRLSH ZERO 8.28 J"
    (
        "loose_name_price",
        re.compile(
            rf"^(?P<name>(?:\d+[A-Za-z]|[^\d\s]).*?)[\s:.\-]*"
            rf"(?:{_CURRENCY}(?P<cur_price>{_AMOUNT})|(?P<price>{_DECIMAL_PRICE})|(?P<eq_price>[\d,]*\d)\s*/=)"
            r"\s*(?:/=)?\s*[A-Za-z]?$",
            re.IGNORECASE,
        ),
    ),
    # "2 x Coke 300.00", "3 Eggs Rs. 90.00"
    (
        "qty_name_price",
        re.compile(
            rf"^(?P<qty>\d+(?:[.,]\d+)?)\s*[xX@*]?\s+(?P<name>.*?[A-Za-z].*?)\s+{_CURRENCY}?"
            rf"(?P<price>{_AMOUNT})\s*(?:/=)?$",
            re.IGNORECASE,
        ),
    ),
)

HEADER_TOKEN_PATTERN = re.compile(r"\b(?:no|item|items|qty|price|amount|description|desc)\b", re.IGNORECASE)

SUMMARY_KEYWORD_PATTERN = re.compile(
    r"\bsub[\s-]?total|\btotal\b|\btax\b|\bvat\b|\bgst\b|\bamount\b|\bchange\b",
    re.IGNORECASE,
)
# "TOTAL Rs. 770/=", "TOTAL 12": summary amounts printed without decimals.
SUMMARY_TRAILING_AMOUNT_PATTERN = re.compile(
    rf"(?:{_CURRENCY}[\d,]*\d|[\d,]*\d\s*/=|\s[\d,]*\d)(?:\.\d{{1,2}})?\s*(?:/=)?$",
    re.IGNORECASE,
)
# "VAT Reg No 123456", "Invoice # 4410" end in a number but are not amounts.
SUMMARY_NUMBER_LABEL_PATTERN = re.compile(r"\breg(?:istration)?\b|\bno\b|#|\binvoice\b|\btin\b", re.IGNORECASE)

# Receipt header/footer boilerplate that never holds an item.
BOILERPLATE_PATTERNS = (
    re.compile(r"thank\s*you", re.IGNORECASE),
    re.compile(r"have\s+a\b", re.IGNORECASE),
    re.compile(r"visit\s+us", re.IGNORECASE),
    re.compile(r"www\.|https?://|\.com\b|\.lk\b", re.IGNORECASE),
    re.compile(r"\bphone\b|\btel\b|tel:", re.IGNORECASE),
    re.compile(r"address", re.IGNORECASE),
    re.compile(r"^[-=_*~.#\s]{3,}$"),
    PHONE_PATTERN,
)


class ItemSectionState(Enum):
    OUTSIDE_ITEM_SECTION = "outside"
    INSIDE_ITEM_SECTION = "inside"


def _is_table_header(line: str) -> bool:
    """Return True for column header rows like "NO ITEM QTY PRICE AMOUNT" or "ITEMS:"."""
    if has_decimal_amount(line):
        return False
    tokens = {t.lower() for t in HEADER_TOKEN_PATTERN.findall(line)}
    if len(tokens) >= 2:
        return True
    # A lone column word with punctuation only, e.g. "ITEMS:" or "Description"
    return len(tokens) == 1 and re.fullmatch(r"[\W_]*[A-Za-z]+[\W_]*", line) is not None


def _is_summary_line(line: str) -> bool:
    if not SUMMARY_KEYWORD_PATTERN.search(line):
        return False
    if has_decimal_amount(line):
        return True
    return bool(SUMMARY_TRAILING_AMOUNT_PATTERN.search(line)) and not SUMMARY_NUMBER_LABEL_PATTERN.search(line)


def _has_leading_table_header(lines: list[str]) -> bool:
    """A header only counts when it comes before the first summary line."""
    for line in lines:
        if _is_table_header(line):
            return True
        if _is_summary_line(line):
            return False
    return False


def _is_boilerplate(line: str) -> bool:
    return any(pattern.search(line) for pattern in BOILERPLATE_PATTERNS)


def _parse_quantity(raw: str | None) -> float | None:
    """Quantity columns use comma as the decimal separator ("1,500" kg -> 1.5)."""
    if raw is None:
        return 1.0
    try:
        return float(raw.replace(",", "."))
    except ValueError:
        return None


def _match_item_row(line: str) -> tuple[bool, LineItem | None]:
    """
    Try the row shapes in order.

    Returns:
        (matched, item): matched is True when some row shape fit the line; item
        is the first valid item produced, or None when every fit was rejected.
    """
    matched_any = False
    for _shape, pattern in ITEM_ROW_PATTERNS:
        match = pattern.match(line)
        if not match:
            continue
        matched_any = True
        groups = match.groupdict()
        raw_price = groups.get("price") or groups.get("cur_price") or groups.get("eq_price")
        price = parse_amount(raw_price or "")
        quantity = _parse_quantity(groups.get("qty"))
        item = _build_item(groups["name"], price, quantity)
        if item is not None:
            return True, item
    return matched_any, None


def _build_item(raw_name: str, price: float | None, quantity: float | None) -> LineItem | None:
    name = strip_leading_receipt_codes(raw_name).strip(" .:-")
    if not is_valid_item_name(name):
        return None
    if price is None or not 0 < price < MAX_ITEM_PRICE:
        return None
    if quantity is None or quantity <= 0:
        return None
    cleaned = clean_item_name(name)
    if not cleaned:
        return None
    return LineItem(name=cleaned, price=price, quantity=quantity)


@dataclass
class _ItemScanner:
    """Mutable walk state; one instance per extraction call."""

    state: ItemSectionState
    items: list[LineItem] = field(default_factory=list)
    warnings: list[ReceiptWarning] = field(default_factory=list)
    pending_name: str | None = None
    section_item_count: int = 0
    closed_by_summary: bool = False

    def enter_section(self) -> None:
        self.state = ItemSectionState.INSIDE_ITEM_SECTION
        self.pending_name = None
        self.section_item_count = 0

    def leave_section(self) -> None:
        self.state = ItemSectionState.OUTSIDE_ITEM_SECTION
        self.pending_name = None

    def emit(self, item: LineItem) -> None:
        self.items.append(item)
        self.section_item_count += 1
        self.pending_name = None

    def warn(self, message: str, line: str) -> None:
        context = line.strip()
        if len(context) > 80:
            context = context[:80]
        self.warnings.append(
            ReceiptWarning(
                message=f'{message} (context: "{context}")',
                after_item_index=(len(self.items) - 1) if self.items else None,
            )
        )

    @property
    def inside(self) -> bool:
        return self.state is ItemSectionState.INSIDE_ITEM_SECTION

    def feed(self, line: str) -> None:
        if _is_table_header(line):
            # Footers such as "No. of Items : 1" look like column headers.
            if not self.closed_by_summary:
                self.enter_section()
            return

        if _is_summary_line(line):
            self.leave_section()
            self.closed_by_summary = True
            return

        if _is_boilerplate(line):
            # Header boilerplate (address, phone) may precede the first item.
            if self.section_item_count:
                self.leave_section()
            self.pending_name = None
            return

        if is_price_only_line(line):
            price = parse_amount(line)
            if self.pending_name is not None:
                item = _build_item(self.pending_name, price, 1.0)
                self.pending_name = None
                if item is not None:
                    self.emit(item)
                elif price is not None:
                    self.warn(f"maybe missed item near price {price:.2f}", line)
            elif self.inside and price is not None and price > 0:
                self.warn(f"maybe missed item near price {price:.2f}", line)
            return

        if not self.inside:
            return

        if looks_like_date_line(line):
            return

        matched, item = _match_item_row(line)
        if item is not None:
            self.emit(item)
            return
        if matched:
            amount = parse_amount(line)
            if amount is not None and amount >= MAX_ITEM_PRICE:
                self.warn(f"ignored implausible item price {amount:.2f}", line)
            return

        if is_valid_item_name(line):
            self.pending_name = line


def extract_items(
    lines: list[str],
    warning_sink: list[ReceiptWarning] | None = None,
) -> list[LineItem]:
    """
    Extract line items from receipt lines.

    This is heuristic-based. Receipts with a column header row only have items
    read between that header and the next summary/footer line; receipts
    without one are treated as a single implicit item section.

    Args:
        lines: Tokenized receipt lines
        warning_sink: Optional list collecting review hints for skipped prices
    """
    has_header = _has_leading_table_header(lines)
    scanner = _ItemScanner(
        state=ItemSectionState.OUTSIDE_ITEM_SECTION if has_header else ItemSectionState.INSIDE_ITEM_SECTION
    )
    for line in lines:
        scanner.feed(line)

    if warning_sink is not None:
        warning_sink.extend(scanner.warnings)

    # Keep duplicates: two cartons of the same milk are two items.
    return scanner.items
