"""Spending analytics workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path

from slipscan.application.receipts.listing import ReceiptListFilters, record_matches
from slipscan.domain.analytics import SpendingSummary, summarize_spending
from slipscan.runtime.receipt_storage import list_receipt_records


@dataclass(frozen=True)
class SpendingAnalyticsRequest:
    """Inputs for the spending summary; None means unfiltered."""

    user_id: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    records_dir: Path | None = None


def run_spending_analytics(request: SpendingAnalyticsRequest | None = None) -> SpendingSummary:
    """Summarize spending by category and month over stored records."""
    request = request or SpendingAnalyticsRequest()
    filters = ReceiptListFilters(
        user_id=request.user_id,
        start_date=request.start_date,
        end_date=request.end_date,
    )
    records = [record for _path, record in list_receipt_records(request.records_dir) if record_matches(record, filters)]
    return summarize_spending(records)
