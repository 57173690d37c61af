"""European number and date formatting for printed documents.

Amounts and weights are printed with period thousands grouping and a comma
decimal separator ("1.234,50"), dates as dd/mm/yyyy.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float]


def _quantize(value: Number, scale: int) -> Decimal:
    quantizer = Decimal(1).scaleb(-scale)
    return Decimal(str(value)).quantize(quantizer, rounding=ROUND_HALF_UP)


def _group(value: Decimal, scale: int) -> str:
    # Python formats with "," grouping and "." decimals; swap them.
    text = f"{value:,.{scale}f}"
    return text.replace(",", "\0").replace(".", ",").replace("\0", ".")


def format_amount(value: Number) -> str:
    """Monetary amount with exactly 2 decimals: 1234.5 -> "1.234,50"."""
    return _group(_quantize(value, 2), 2)


def format_weight(value: Number) -> str:
    """Weight in whole kilograms: 1234.5 -> "1.235"."""
    return _group(_quantize(value, 0), 0)


def format_decimal(value: Number, scale: int) -> str:
    """Fixed number of decimals with European separators."""
    return _group(_quantize(value, scale), scale)


def format_quantity(value: Number) -> str:
    """Crate/piece count: whole numbers like weights, fractions keep their decimals."""
    number = Decimal(str(value))
    if number == number.to_integral_value():
        return format_weight(number)
    exponent = number.normalize().as_tuple().exponent
    return format_decimal(number, -exponent if isinstance(exponent, int) else 2)


def format_date(value: date) -> str:
    """Calendar date as dd/mm/yyyy."""
    return value.strftime("%d/%m/%Y")
