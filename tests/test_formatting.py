"""Unit tests for European number and date formatting."""

from datetime import date
from decimal import Decimal

import pytest

from seadocs.engine.formatting import (
    format_amount,
    format_date,
    format_decimal,
    format_quantity,
    format_weight,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (Decimal("1234.5"), "1.234,50"),
        (Decimal("0"), "0,00"),
        (Decimal("4.505"), "4,51"),
        (Decimal("1234567.891"), "1.234.567,89"),
        (12, "12,00"),
    ],
)
def test_format_amount(value, expected):
    assert format_amount(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (Decimal("1234.5"), "1.235"),
        (Decimal("1234.4"), "1.234"),
        (Decimal("250"), "250"),
        (Decimal("0.5"), "1"),
    ],
)
def test_format_weight(value, expected):
    assert format_weight(value) == expected


def test_format_decimal_two_places():
    assert format_decimal(Decimal("7.5"), 2) == "7,50"
    assert format_decimal(Decimal("1500.125"), 2) == "1.500,13"


@pytest.mark.parametrize(
    "value,expected",
    [
        (Decimal("20"), "20"),
        (Decimal("20.0"), "20"),
        (Decimal("1500"), "1.500"),
        (Decimal("2.5"), "2,5"),
    ],
)
def test_format_quantity(value, expected):
    assert format_quantity(value) == expected


def test_format_date():
    assert format_date(date(2025, 3, 7)) == "07/03/2025"
