import math

import pytest

from mortgage_calc.data_models import LoanTerms
from mortgage_calc.formatter import format_currency
from mortgage_calc.utils import parse_amount, parse_rate, validate_terms


@pytest.mark.parametrize(
    "text,expected",
    [
        ("400000", 400_000),
        ("400,000", 400_000),
        ("$400,000", 400_000),
        ("400k", 400_000),
        (" 1.2M ", 1_200_000),
        ("2500.50", 2_500.5),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "abc", "12x", "k"])
def test_parse_amount_rejects_junk(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_parse_rate():
    assert parse_rate("6.5") == 6.5
    assert parse_rate("6.5%") == 6.5
    with pytest.raises(ValueError):
        parse_rate("six")


def test_validate_terms_returns_loan_terms():
    terms = validate_terms(400_000, 6.5, 30)
    assert terms == LoanTerms(400_000.0, 6.5, 30)
    assert isinstance(terms.term_years, int)
    assert validate_terms(100_000, 0, 10.0).term_years == 10


@pytest.mark.parametrize(
    "principal,rate,years,message",
    [
        (0, 5, 30, "Principal must be positive"),
        (-1, 5, 30, "Principal must be positive"),
        (100_000, -0.5, 30, "Interest rate cannot be negative"),
        (100_000, 5, 0, "Term must be positive"),
        (100_000, 5, -10, "Term must be positive"),
        (100_000, 5, 12.5, "whole number"),
        (math.inf, 5, 30, "finite"),
        (100_000, math.nan, 30, "finite"),
    ],
)
def test_validate_terms_rejects(principal, rate, years, message):
    with pytest.raises(ValueError, match=message):
        validate_terms(principal, rate, years)


@pytest.mark.parametrize(
    "value,expected",
    [
        (400_000, "$400,000"),
        (2528.27, "$2,528"),
        (1_234_567.8, "$1,234,568"),
        (0, "$0"),
        (-1_250, "-$1,250"),
        (-0.2, "$0"),
    ],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected
