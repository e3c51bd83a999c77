"""Core domain models for slipscan.

This module provides the data models used throughout the project:
- ParsedReceipt, LineItem, ReceiptWarning: parser output
- ReceiptRecord: parser output plus upload metadata, as stored
- ReceiptCategory, PaymentMethod: derived enums

Usage:
    from slipscan.domain import ParsedReceipt, LineItem
"""

from slipscan.domain.receipt import (
    UNKNOWN_STORE,
    LineItem,
    ParsedReceipt,
    PaymentMethod,
    ReceiptCategory,
    ReceiptRecord,
    ReceiptWarning,
)

__all__ = [
    "UNKNOWN_STORE",
    "LineItem",
    "ParsedReceipt",
    "PaymentMethod",
    "ReceiptCategory",
    "ReceiptRecord",
    "ReceiptWarning",
]
