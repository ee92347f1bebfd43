"""Tests for amount parsing."""

import math

import pytest

from expensetrack.utils.amount_parser import is_number, parse_amount


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("123.45", 123.45),
        ("-123.45", -123.45),
        ("+5", 5.0),
        (".5", 0.5),
        ("  42  ", 42.0),
        ("1e3", 1000.0),
        ("19.99 USD", 19.99),
        ("7.", 7.0),
    ],
)
def test_parse_amount_numeric(raw, expected):
    assert parse_amount(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["", "   ", "abc", "$12.00", "N/A", None])
def test_parse_amount_non_numeric_is_nan(raw):
    assert math.isnan(parse_amount(raw))


def test_parse_amount_infinity():
    assert parse_amount("Infinity") == math.inf
    assert parse_amount("-Infinity") == -math.inf


def test_is_number_rejects_bool_and_strings():
    assert is_number(3)
    assert is_number(2.5)
    assert is_number(math.nan)
    assert not is_number(True)
    assert not is_number("3")
    assert not is_number(None)
