"""Utility functions for the mortgage calculator.

This module provides helpers for parsing user input into Python numbers and
for validating loan terms before they reach the engine. The engine itself
accepts anything it can evaluate; rejecting meaningless input is done here.
"""

from __future__ import annotations

import math
from typing import Union

from .data_models import LoanTerms

Number = Union[int, float]


def parse_amount(value: str) -> float:
    """Parse a numeric string with optional suffixes.

    Accepts plain numbers ("400000"), thousands separators ("400,000") and
    shorthand with ``k``/``m`` suffixes (e.g. "400k" meaning 400_000).

    Raises
    ------
    ValueError
        If the string is not a number.
    """
    cleaned = value.strip().lower().replace(",", "").lstrip("$")
    factor = 1.0
    if cleaned.endswith("k"):
        factor = 1_000.0
        cleaned = cleaned[:-1]
    elif cleaned.endswith("m"):
        factor = 1_000_000.0
        cleaned = cleaned[:-1]
    try:
        return float(cleaned) * factor
    except ValueError as exc:
        raise ValueError(f"Invalid amount: {value}") from exc


def parse_rate(value: str) -> float:
    """Parse an annual rate in percent ("6.5" or "6.5%")."""
    cleaned = value.strip()
    if cleaned.endswith("%"):
        cleaned = cleaned[:-1]
    try:
        return float(cleaned)
    except ValueError as exc:
        raise ValueError(f"Invalid interest rate: {value}") from exc


def validate_terms(principal: Number, annual_rate_percent: Number, term_years: Number) -> LoanTerms:
    """Check loan inputs and return them as ``LoanTerms``.

    Raises
    ------
    ValueError
        If the principal is not positive, the rate is negative, the term is
        not a positive whole number of years, or any value is not finite.
    """
    for label, number in (("Principal", principal), ("Interest rate", annual_rate_percent), ("Term", term_years)):
        if not math.isfinite(number):
            raise ValueError(f"{label} must be a finite number")
    if principal <= 0:
        raise ValueError("Principal must be positive")
    if annual_rate_percent < 0:
        raise ValueError("Interest rate cannot be negative")
    if term_years != int(term_years):
        raise ValueError("Term must be a whole number of years")
    if term_years <= 0:
        raise ValueError("Term must be positive")
    return LoanTerms(float(principal), float(annual_rate_percent), int(term_years))
