"""Views derived from an amortization schedule.

The engine produces a payment and a month-by-month schedule; the functions in
this module reshape that output for its consumers: the headline summary, the
cumulative chart series, the principal/interest breakdown and the per-year
table. They also turn the dataclasses into plain dictionaries for JSON.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Sequence

from .data_models import MONTHS_PER_YEAR, LoanSummary, PeriodRecord, YearRow


def summarize(principal: float, monthly_payment: float, schedule: Sequence[PeriodRecord]) -> LoanSummary:
    """Return total paid and total interest for a computed schedule."""
    payment_count = len(schedule)
    total_paid = monthly_payment * payment_count
    return LoanSummary(
        principal=principal,
        monthly_payment=monthly_payment,
        payment_count=payment_count,
        total_paid=total_paid,
        total_interest=total_paid - principal,
    )


def chart_points(schedule: Sequence[PeriodRecord]) -> List[PeriodRecord]:
    """Sample the schedule once a year (plus the first month) for charting."""
    return [r for r in schedule if r.period == 1 or r.period % MONTHS_PER_YEAR == 0]


def yearly_rows(schedule: Sequence[PeriodRecord]) -> List[YearRow]:
    """One row per completed loan year, taken from the year's last month."""
    return [
        YearRow(
            year=r.period // MONTHS_PER_YEAR,
            total_principal=r.total_principal,
            total_interest=r.total_interest,
            ending_balance=r.ending_balance,
        )
        for r in schedule
        if r.period % MONTHS_PER_YEAR == 0
    ]


def payment_breakdown(summary: LoanSummary) -> List[Dict[str, Any]]:
    """Split the total paid into its principal and interest slices.

    Each slice carries its ``share`` of the total as a fraction so that
    consumers can label a pie chart without redoing the arithmetic.
    """
    slices = [("Principal", summary.principal), ("Interest", summary.total_interest)]
    total = sum(value for _, value in slices)
    return [
        {"name": name, "value": value, "share": value / total if total else 0.0}
        for name, value in slices
    ]


def serialize_schedule(schedule: Sequence[PeriodRecord]) -> List[Dict[str, Any]]:
    """Convert schedule records into JSON-serialisable dictionaries."""
    return [asdict(r) for r in schedule]


def serialize_summary(summary: LoanSummary) -> Dict[str, Any]:
    return asdict(summary)


def serialize_yearly(rows: Sequence[YearRow]) -> List[Dict[str, Any]]:
    return [asdict(r) for r in rows]
