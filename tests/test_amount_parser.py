"""Tests for amount parser."""

from decimal import Decimal

import pytest

from duofin.domain.errors import ValidationError
from duofin.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "value,expected",
    [
        ("123.45", Decimal("123.45")),
        ("R$ 1.234,56", Decimal("1234.56")),
        ("$1,234.56", Decimal("1234.56")),
        ("12,50", Decimal("12.50")),
        ("1,000", Decimal("1000")),
        (250, Decimal("250")),
        (0.1, Decimal("0.1")),
        (Decimal("9.99"), Decimal("9.99")),
    ],
)
def test_parse_amount_formats(value, expected):
    assert parse_amount(value) == expected


def test_parse_amount_rejects_negative():
    with pytest.raises(ValidationError):
        parse_amount("-10")


def test_parse_amount_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_amount("ten reais")


def test_parse_amount_rejects_empty():
    with pytest.raises(ValidationError):
        parse_amount("  ")


def test_parse_amount_rejects_bool():
    with pytest.raises(ValidationError):
        parse_amount(True)
