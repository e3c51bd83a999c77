"""Pure spending aggregation over stored receipt records."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from slipscan.domain.receipt import ReceiptCategory, ReceiptRecord

MONTHLY_TREND_LIMIT = 12


@dataclass(frozen=True)
class CategorySpending:
    category: ReceiptCategory
    total_spent: float
    receipt_count: int

    @property
    def average_spent(self) -> float:
        return self.total_spent / self.receipt_count if self.receipt_count else 0.0


@dataclass(frozen=True)
class MonthlySpending:
    year: int
    month: int
    total_spent: float
    receipt_count: int


@dataclass(frozen=True)
class SpendingSummary:
    category_breakdown: list[CategorySpending] = field(default_factory=list)
    monthly_trend: list[MonthlySpending] = field(default_factory=list)
    total_receipts: int = 0
    total_spent: float = 0.0


def summarize_spending(records: Iterable[ReceiptRecord]) -> SpendingSummary:
    """
    Group records by category and by month.

    Every record counts toward receipt counts; failed records carry a total of 0.
    Categories are ordered by total spent (highest first), months newest first and
    capped at MONTHLY_TREND_LIMIT entries.
    """
    by_category: dict[ReceiptCategory, tuple[float, int]] = {}
    by_month: dict[tuple[int, int], tuple[float, int]] = {}
    total_receipts = 0

    for record in records:
        total_receipts += 1
        amount = record.total

        spent, count = by_category.get(record.category, (0.0, 0))
        by_category[record.category] = (spent + amount, count + 1)

        when = record.effective_date
        key = (when.year, when.month)
        spent, count = by_month.get(key, (0.0, 0))
        by_month[key] = (spent + amount, count + 1)

    breakdown = [
        CategorySpending(category=category, total_spent=round(spent, 2), receipt_count=count)
        for category, (spent, count) in by_category.items()
    ]
    breakdown.sort(key=lambda c: c.total_spent, reverse=True)

    trend = [
        MonthlySpending(year=year, month=month, total_spent=round(spent, 2), receipt_count=count)
        for (year, month), (spent, count) in sorted(by_month.items(), reverse=True)
    ][:MONTHLY_TREND_LIMIT]

    return SpendingSummary(
        category_breakdown=breakdown,
        monthly_trend=trend,
        total_receipts=total_receipts,
        total_spent=round(sum(c.total_spent for c in breakdown), 2),
    )
