#!/usr/bin/env python3

import argparse
import logging
import os
from collections.abc import Callable, Sequence
from datetime import date

from slipscan.domain.receipt import ReceiptCategory
from slipscan.runtime import set_log_level
from slipscan.runtime.ocr_client import DEFAULT_OCR_URL


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Normalize command handlers that call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def _add_date_range_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--from", dest="start_date", type=_iso_date, help="Earliest receipt date (YYYY-MM-DD)")
    parser.add_argument("--to", dest="end_date", type=_iso_date, help="Latest receipt date (YYYY-MM-DD)")
    parser.add_argument("--user", dest="user_id", help="Only receipts uploaded by this user")


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    default_ocr_url = os.environ.get("SLIPSCAN_OCR_URL", "").strip() or DEFAULT_OCR_URL

    parser = argparse.ArgumentParser(
        description="Receipt OCR text interpretation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <text-file|->        Parse OCR text and print the receipt as JSON
  scan <image>               OCR a receipt image, parse it and store a record
  list                       List stored receipt records
  analytics                  Spending by category and by month
  delete <id>                Delete a stored receipt record

Notes:
  receipts/records/  = one JSON record per processed or failed receipt
  receipts/ocr_text/ = raw OCR text from scans
""",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # parse command
    parse_parser = subparsers.add_parser("parse", help="Parse OCR text into a receipt")
    parse_parser.add_argument("text_file", help="OCR text file, or - for stdin")

    # scan command
    scan_parser = subparsers.add_parser("scan", help="Scan a receipt image")
    scan_parser.add_argument("image", help="Path to receipt image")
    scan_parser.add_argument(
        "--ocr-url", default=default_ocr_url, help=f"OCR service URL (default: {default_ocr_url})"
    )
    scan_parser.add_argument("--user", dest="user_id", help="User id stored with the record")

    # list command
    list_parser = subparsers.add_parser("list", help="List stored receipts")
    list_parser.add_argument(
        "--category",
        choices=[c.value for c in ReceiptCategory],
        help="Only receipts in this category",
    )
    _add_date_range_arguments(list_parser)
    list_parser.add_argument("--min", dest="min_total", type=float, help="Minimum total")
    list_parser.add_argument("--max", dest="max_total", type=float, help="Maximum total")
    list_parser.add_argument("--limit", type=int, default=50, help="Maximum receipts shown (default: 50)")

    # analytics command
    analytics_parser = subparsers.add_parser("analytics", help="Show spending analytics")
    _add_date_range_arguments(analytics_parser)

    # delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a stored receipt")
    delete_parser.add_argument("record_id", help="Record id (see 'slipscan list')")
    delete_parser.add_argument("--delete-image", action="store_true", help="Also delete the receipt image")

    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "parse":
        from slipscan.cli.receipt import cmd_parse

        return _run_command(cmd_parse, args)
    elif args.command == "scan":
        from slipscan.cli.receipt import cmd_scan

        return _run_command(cmd_scan, args)
    elif args.command == "list":
        from slipscan.cli.receipt import cmd_list

        return _run_command(cmd_list, args)
    elif args.command == "analytics":
        from slipscan.cli.receipt import cmd_analytics

        return _run_command(cmd_analytics, args)
    elif args.command == "delete":
        from slipscan.cli.receipt import cmd_delete

        return _run_command(cmd_delete, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
