"""Parse raw OCR text into structured ParsedReceipt data."""

from dataclasses import dataclass

from slipscan.domain.receipt import LineItem, ParsedReceipt, ReceiptWarning
from slipscan.domain.store_categorization import StoreCategoryRule, categorize_store

from .date_utils import default_receipt_date
from .ocr_parser import (
    extract_date,
    extract_items,
    extract_payment_method,
    extract_store_name,
    extract_subtotal,
    extract_tax,
    extract_total,
    split_lines,
)


class ReceiptParseError(ValueError):
    """Raised when OCR text holds nothing a receipt can be built from."""


@dataclass(frozen=True)
class ReconciledAmounts:
    subtotal: float | None
    tax: float | None
    total: float | None
    derived: tuple[str, ...] = ()


def _money(value: float) -> float:
    return round(value, 2)


def reconcile_amounts(
    items: list[LineItem],
    subtotal: float | None,
    tax: float | None,
    total: float | None,
) -> ReconciledAmounts:
    """
    Fill in missing summary amounts from the ones read off the receipt.

    Values extracted directly from the text are never overwritten.
    1. With a total and items: a missing subtotal becomes the item sum, and a
       missing tax becomes total - item sum when the total is larger.
    2. Without a total: items give item sum + tax; otherwise subtotal + tax
       when that is positive.
    """
    derived: list[str] = []
    items_sum = _money(sum(item.line_total for item in items))

    if total is not None and items:
        if subtotal is None:
            subtotal = items_sum
            derived.append("subtotal")
        if tax is None and total > items_sum:
            tax = _money(max(0.0, total - items_sum))
            derived.append("tax")

    if total is None:
        if items:
            total = _money(items_sum + (tax or 0))
            derived.append("total")
        elif subtotal is not None or tax is not None:
            candidate = _money((subtotal or 0) + (tax or 0))
            if candidate > 0:
                total = candidate
                derived.append("total")

    return ReconciledAmounts(subtotal=subtotal, tax=tax, total=total, derived=tuple(derived))


def parse_receipt(
    ocr_text: str,
    *,
    category_rules: tuple[StoreCategoryRule, ...] | None = None,
) -> ParsedReceipt:
    """
    Parse OCR text into a ParsedReceipt.

    This is a best-effort parser: every field degrades to a default or None
    rather than failing. Same input, same output, apart from the current-time
    default used when the text has no date.

    Args:
        ocr_text: Raw text returned by the OCR service
        category_rules: Ordered (category, keywords) table; built-in defaults if None

    Returns:
        ParsedReceipt with extracted and reconciled fields

    Raises:
        ReceiptParseError: if the text has no non-blank line
    """
    lines = split_lines(ocr_text)
    if not lines:
        raise ReceiptParseError("Failed to parse receipt: no text lines found")

    store_name = extract_store_name(lines)
    receipt_date = extract_date(lines)
    date_is_placeholder = False
    if receipt_date is None:
        receipt_date = default_receipt_date()
        date_is_placeholder = True

    warnings: list[ReceiptWarning] = []
    items = extract_items(lines, warning_sink=warnings)

    amounts = reconcile_amounts(
        items,
        subtotal=extract_subtotal(lines),
        tax=extract_tax(lines),
        total=extract_total(lines),
    )
    for field_name in amounts.derived:
        warnings.append(
            ReceiptWarning(
                message=f"{field_name} not printed on receipt; derived from other amounts",
                after_item_index=(len(items) - 1) if items else None,
            )
        )

    return ParsedReceipt(
        store_name=store_name,
        date=receipt_date,
        date_is_placeholder=date_is_placeholder,
        items=items,
        subtotal=amounts.subtotal,
        tax=amounts.tax,
        total=amounts.total,
        category=categorize_store(store_name, rules=category_rules),
        payment_method=extract_payment_method(lines),
        warnings=warnings,
    )
