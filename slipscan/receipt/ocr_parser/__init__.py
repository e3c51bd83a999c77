"""Composable OCR receipt parser components."""

from .common import clean_item_name, is_valid_item_name, parse_amount, split_lines
from .fields_parser import (
    extract_date,
    extract_payment_method,
    extract_store_name,
    extract_subtotal,
    extract_tax,
    extract_total,
)
from .items_text_parser import ItemSectionState, extract_items

__all__ = [
    "ItemSectionState",
    "clean_item_name",
    "extract_date",
    "extract_items",
    "extract_payment_method",
    "extract_store_name",
    "extract_subtotal",
    "extract_tax",
    "extract_total",
    "is_valid_item_name",
    "parse_amount",
    "split_lines",
]
