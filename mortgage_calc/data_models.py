"""Data models for the mortgage calculator.

This module defines dataclasses representing the entities used by the
calculator: the loan terms supplied by the user, the per-month records of the
amortization schedule and the aggregate figures derived from it. All of them
are frozen; a new set of terms means a new schedule, never a mutated one.
"""

from dataclasses import dataclass
from typing import List

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class LoanTerms:
    """Inputs of a fixed-rate, fully-amortizing loan.

    Attributes
    ----------
    principal: float
        The amount borrowed, in currency units.
    annual_rate_percent: float
        Nominal annual interest rate in percent (``6.5`` means 6.5 %).
    term_years: int
        Loan term in whole years. Payments are monthly.
    """

    principal: float
    annual_rate_percent: float
    term_years: int

    @property
    def periodic_rate(self) -> float:
        """Monthly interest rate as a fraction. Zero for interest-free loans."""
        return self.annual_rate_percent / 100 / MONTHS_PER_YEAR

    @property
    def payment_count(self) -> int:
        return self.term_years * MONTHS_PER_YEAR


@dataclass(frozen=True)
class PeriodRecord:
    """One month of the amortization schedule.

    ``interest_payment + principal_payment`` equals ``payment`` within
    floating-point tolerance. ``ending_balance`` is the balance left after
    this month's payment; ``total_principal`` and ``total_interest`` are
    running sums from the first month through this one.
    """

    period: int
    payment: float
    interest_payment: float
    principal_payment: float
    ending_balance: float
    total_principal: float
    total_interest: float


Schedule = List[PeriodRecord]


@dataclass(frozen=True)
class LoanSummary:
    """Headline figures of a loan."""

    principal: float
    monthly_payment: float
    payment_count: int
    total_paid: float
    total_interest: float


@dataclass(frozen=True)
class YearRow:
    """Cumulative position at the end of a completed loan year."""

    year: int
    total_principal: float
    total_interest: float
    ending_balance: float
