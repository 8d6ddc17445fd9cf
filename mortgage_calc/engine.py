"""Core calculation engine for the mortgage calculator.

This module derives the constant monthly payment of a fixed-rate loan and
walks the balance down month by month, recording how each payment splits
between interest and principal. It is a pure function of its inputs: no I/O,
no shared state and no caching, so callers may invoke it from anywhere.
"""

from __future__ import annotations

from typing import List, Tuple

from .data_models import LoanTerms, PeriodRecord


def _calculate_annuity_payment(principal: float, periodic_rate: float, payment_count: int) -> float:
    """Return the constant monthly payment that retires ``principal``.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero, the
    payment simplifies to ``P / n``.
    """
    if periodic_rate == 0:
        return principal / payment_count
    factor = (1 + periodic_rate) ** payment_count
    return principal * (periodic_rate * factor) / (factor - 1)


def compute_amortization(
    principal: float, annual_rate_percent: float, term_years: int
) -> Tuple[float, List[PeriodRecord]]:
    """Compute the monthly payment and full amortization schedule of a loan.

    Parameters
    ----------
    principal: float
        Amount borrowed.
    annual_rate_percent: float
        Nominal annual rate in percent. Zero is a supported, interest-free
        case.
    term_years: int
        Term in whole years; the schedule has ``term_years * 12`` entries.

    Returns
    -------
    payment: float
        The constant monthly payment.
    schedule: List[PeriodRecord]
        One record per month in ascending order, starting at period 1.

    Input validation is the caller's job (see ``utils.validate_terms``). A
    zero term has no meaningful schedule and is not guarded here.
    """
    terms = LoanTerms(principal, annual_rate_percent, term_years)
    rate = terms.periodic_rate
    payment = _calculate_annuity_payment(principal, rate, terms.payment_count)

    schedule: List[PeriodRecord] = []
    balance = principal
    total_principal = 0.0
    total_interest = 0.0
    for period in range(1, terms.payment_count + 1):
        interest_payment = balance * rate
        principal_payment = payment - interest_payment
        # Clamp absorbs the rounding residual left after the last payment
        balance = max(0.0, balance - principal_payment)
        total_principal += principal_payment
        total_interest += interest_payment
        schedule.append(
            PeriodRecord(
                period=period,
                payment=payment,
                interest_payment=interest_payment,
                principal_payment=principal_payment,
                ending_balance=balance,
                total_principal=total_principal,
                total_interest=total_interest,
            )
        )

    return payment, schedule


def compute_for_terms(terms: LoanTerms) -> Tuple[float, List[PeriodRecord]]:
    """Shortcut for ``compute_amortization`` taking a ``LoanTerms``."""
    return compute_amortization(terms.principal, terms.annual_rate_percent, terms.term_years)
