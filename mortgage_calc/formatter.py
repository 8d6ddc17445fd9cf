"""Output helpers for the mortgage calculator.

This module provides simple functions to render summaries and schedules in a
tabular text format using built-in printing and string formatting. Amounts
are shown in whole US dollars.
"""

from __future__ import annotations

from typing import Iterable

from .data_models import LoanSummary, PeriodRecord, YearRow


def format_currency(value: float) -> str:
    """Format ``value`` as whole dollars with thousands separators."""
    text = f"${abs(value):,.0f}"
    # "-$0" reads badly, so tiny negatives print as "$0"
    if value < 0 and text != "$0":
        return "-" + text
    return text


def print_summary(summary: LoanSummary) -> None:
    """Print the headline figures of a loan."""
    print("Summary")
    print("-" * 72)
    print(f"Monthly payment    : {summary.monthly_payment:.2f}")
    print(f"Principal          : {format_currency(summary.principal)}")
    print(f"Total interest     : {format_currency(summary.total_interest)}")
    print(f"Total cost         : {format_currency(summary.total_paid)}")
    print(f"Payments           : {summary.payment_count}")
    print("-" * 72)


def print_schedule(schedule: Iterable[PeriodRecord]) -> None:
    """Print the monthly amortization schedule as a tab separated table."""
    headers = ["Period", "Payment", "Principal", "Interest", "EndBal", "TotPrincipal", "TotInterest"]
    print("\t".join(headers))
    for entry in schedule:
        row = [
            str(entry.period),
            f"{entry.payment:.2f}",
            f"{entry.principal_payment:.2f}",
            f"{entry.interest_payment:.2f}",
            f"{entry.ending_balance:.2f}",
            f"{entry.total_principal:.2f}",
            f"{entry.total_interest:.2f}",
        ]
        print("\t".join(row))


def print_yearly_table(rows: Iterable[YearRow]) -> None:
    """Print one line per completed year with cumulative figures."""
    print(f"{'Year':>4s} {'Principal':>15s} {'Interest':>15s} {'Balance':>15s}")
    for row in rows:
        print(
            f"{row.year:>4d} {format_currency(row.total_principal):>15s} "
            f"{format_currency(row.total_interest):>15s} {format_currency(row.ending_balance):>15s}"
        )


def print_comparison(s1: LoanSummary, s2: LoanSummary) -> None:
    """Print two loan summaries side by side.

    The difference column is scenario2 - scenario1, so a negative value means
    the second scenario is cheaper.
    """
    rows = [
        ("Monthly payment", s1.monthly_payment, s2.monthly_payment),
        ("Total interest", s1.total_interest, s2.total_interest),
        ("Total cost", s1.total_paid, s2.total_paid),
    ]
    print("Comparison")
    print("=" * 72)
    print(f"{'':18s} {'Scenario1':>15s} {'Scenario2':>15s} {'Difference':>15s}")
    for label, first, second in rows:
        cells = [format_currency(v) for v in (first, second, second - first)]
        print(f"{label:18s} " + " ".join(f"{c:>15s}" for c in cells))
    print(f"{'Payments':18s} {s1.payment_count:>15d} {s2.payment_count:>15d} {s2.payment_count - s1.payment_count:>15d}")
    print("=" * 72)
