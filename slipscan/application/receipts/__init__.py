"""Receipt workflows."""

from slipscan.application.receipts.analytics import SpendingAnalyticsRequest, run_spending_analytics
from slipscan.application.receipts.listing import ReceiptListFilters, run_list_receipts
from slipscan.application.receipts.process import (
    ReceiptProcessRequest,
    ReceiptProcessResult,
    run_receipt_processing,
)

__all__ = [
    "ReceiptProcessRequest",
    "ReceiptProcessResult",
    "run_receipt_processing",
    "ReceiptListFilters",
    "run_list_receipts",
    "SpendingAnalyticsRequest",
    "run_spending_analytics",
]
