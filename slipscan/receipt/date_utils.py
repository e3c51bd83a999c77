"""Date helpers for receipt parsing."""

from datetime import datetime


def default_receipt_date() -> datetime:
    """Return the date used when a receipt carries no readable date: now."""
    return datetime.now()
