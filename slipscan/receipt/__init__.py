"""Receipt text interpretation: OCR text in, ParsedReceipt out."""

from slipscan.receipt.ocr_result_parser import ReceiptParseError, parse_receipt, reconcile_amounts

__all__ = [
    "ReceiptParseError",
    "parse_receipt",
    "reconcile_amounts",
]
