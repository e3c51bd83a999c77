"""Receipt listing workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path

from slipscan.domain.receipt import ReceiptCategory, ReceiptRecord
from slipscan.runtime.receipt_storage import list_receipt_records

DEFAULT_LIST_LIMIT = 50


@dataclass(frozen=True)
class ReceiptListFilters:
    """Optional filters for listing stored receipts; None means unfiltered."""

    user_id: str | None = None
    category: ReceiptCategory | None = None
    start_date: date | None = None
    end_date: date | None = None
    min_total: float | None = None
    max_total: float | None = None
    limit: int = DEFAULT_LIST_LIMIT
    records_dir: Path | None = None


@dataclass(frozen=True)
class ReceiptListing:
    """Matching records, newest receipt date first."""

    receipts: list[tuple[Path, ReceiptRecord]]


def record_matches(record: ReceiptRecord, filters: ReceiptListFilters) -> bool:
    if filters.user_id is not None and record.user_id != filters.user_id:
        return False
    if filters.category is not None and record.category is not filters.category:
        return False
    record_date = record.effective_date.date()
    if filters.start_date is not None and record_date < filters.start_date:
        return False
    if filters.end_date is not None and record_date > filters.end_date:
        return False
    if filters.min_total is not None and record.total < filters.min_total:
        return False
    if filters.max_total is not None and record.total > filters.max_total:
        return False
    return True


def run_list_receipts(filters: ReceiptListFilters | None = None) -> ReceiptListing:
    """Load stored records matching the filters."""
    filters = filters or ReceiptListFilters()
    matching = [
        (path, record) for path, record in list_receipt_records(filters.records_dir) if record_matches(record, filters)
    ]
    matching.sort(key=lambda item: item[1].effective_date, reverse=True)
    if filters.limit > 0:
        matching = matching[: filters.limit]
    return ReceiptListing(receipts=matching)
