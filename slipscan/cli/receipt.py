"""Receipt command handlers used by the unified CLI."""

import argparse
import json
import sys
from pathlib import Path

from slipscan.domain.receipt import ParsedReceipt
from slipscan.runtime import get_logger

logger = get_logger(__name__)


def _print_receipt(receipt: ParsedReceipt) -> None:
    print("\n" + "=" * 60)
    print("PARSED RECEIPT")
    print("=" * 60)
    print(f"Store: {receipt.store_name} [{receipt.category.value}]")
    date_str = receipt.date.date().isoformat() if not receipt.date_is_placeholder else "UNKNOWN"
    print(f"Date: {date_str}")
    if receipt.subtotal is not None:
        print(f"Subtotal: {receipt.subtotal:.2f}")
    if receipt.tax is not None:
        print(f"Tax: {receipt.tax:.2f}")
    total_str = f"{receipt.total:.2f}" if receipt.total is not None else "UNKNOWN"
    print(f"Total: {total_str}")
    print(f"Payment: {receipt.payment_method.value}")
    print(f"\nItems ({len(receipt.items)}):")
    for i, item in enumerate(receipt.items, 1):
        qty_str = f" x{item.quantity:g}" if item.quantity != 1 else ""
        print(f"  {i}. {item.name}{qty_str} - {item.price:.2f}")
    for warning in receipt.warnings:
        print(f"  ! {warning.message}")
    print("=" * 60)


def cmd_parse(args: argparse.Namespace) -> None:
    """Parse OCR text from a file (or stdin) and print the receipt as JSON."""
    from slipscan.receipt.ocr_result_parser import ReceiptParseError, parse_receipt
    from slipscan.runtime import load_store_category_rules

    if args.text_file == "-":
        ocr_text = sys.stdin.read()
    else:
        text_path = Path(args.text_file)
        if not text_path.exists():
            print(f"Error: Text file not found: {text_path}")
            sys.exit(1)
        ocr_text = text_path.read_text()

    try:
        receipt = parse_receipt(ocr_text, category_rules=load_store_category_rules())
    except ReceiptParseError as exc:
        logger.error("%s", exc)
        print(f"Error: {exc}")
        sys.exit(1)

    print(json.dumps(receipt.to_dict(), indent=2))


def cmd_scan(args: argparse.Namespace) -> None:
    """OCR a receipt image, parse it and store the record."""
    from slipscan.application.receipts.process import ReceiptProcessRequest, run_receipt_processing

    result = run_receipt_processing(
        ReceiptProcessRequest(
            image_path=Path(args.image),
            ocr_url=args.ocr_url,
            user_id=args.user_id,
        )
    )

    if result.status == "file_not_found":
        logger.error("%s", result.error)
        print(f"Error: {result.error}")
        sys.exit(1)

    if result.status == "ocr_unavailable":
        logger.error("%s", result.error)
        print(f"OCR service unavailable: {result.error}")
        print("Make sure the OCR service is running before scanning receipts.")
        sys.exit(1)

    if result.status == "failed":
        print(f"Receipt processing failed: {result.error}")
        print(f"Failed record saved to: {result.record_path}")
        sys.exit(1)

    receipt = result.receipt
    if receipt is None or result.record is None:
        print("Scan failed: missing receipt output.")
        sys.exit(1)

    _print_receipt(receipt)
    print(f"\nRecord {result.record.id} saved to: {result.record_path}")


def cmd_list(args: argparse.Namespace) -> None:
    """List stored receipt records, newest first."""
    from slipscan.application.receipts.listing import ReceiptListFilters, run_list_receipts
    from slipscan.domain.receipt import ReceiptCategory

    listing = run_list_receipts(
        ReceiptListFilters(
            user_id=args.user_id,
            category=ReceiptCategory(args.category) if args.category else None,
            start_date=args.start_date,
            end_date=args.end_date,
            min_total=args.min_total,
            max_total=args.max_total,
            limit=args.limit,
        )
    )

    if not listing.receipts:
        print("No receipts found in receipts/records/")
        return

    print(f"\nReceipts ({len(listing.receipts)}):")
    print("-" * 80)
    for _path, record in listing.receipts:
        store = record.receipt.store_name if record.receipt is not None else "(failed)"
        print(
            f"{record.id}  {record.effective_date:%Y-%m-%d}  {store[:30]:<30} "
            f"{record.category.value:<10} {record.total:>10.2f}"
        )
    print("-" * 80)


def cmd_analytics(args: argparse.Namespace) -> None:
    """Print spending by category and by month."""
    from slipscan.application.receipts.analytics import SpendingAnalyticsRequest, run_spending_analytics

    summary = run_spending_analytics(
        SpendingAnalyticsRequest(
            user_id=args.user_id,
            start_date=args.start_date,
            end_date=args.end_date,
        )
    )

    print(f"\nReceipts: {summary.total_receipts}")
    print(f"Total spent: {summary.total_spent:.2f}")

    print("\nBy category:")
    for entry in summary.category_breakdown:
        print(
            f"  {entry.category.value:<12} {entry.total_spent:>10.2f}  "
            f"({entry.receipt_count} receipts, avg {entry.average_spent:.2f})"
        )

    print("\nBy month:")
    for month in summary.monthly_trend:
        print(f"  {month.year:04d}-{month.month:02d}  {month.total_spent:>10.2f}  ({month.receipt_count} receipts)")


def cmd_delete(args: argparse.Namespace) -> None:
    """Delete a stored receipt record by id."""
    from slipscan.runtime.receipt_storage import delete_receipt_record

    if not delete_receipt_record(args.record_id, delete_image=args.delete_image):
        print(f"Error: Receipt record not found: {args.record_id}")
        sys.exit(1)
    print(f"Deleted receipt record {args.record_id}")
