"""Utilities for normalizing comma-decimal numeric input."""

from decimal import Decimal, InvalidOperation
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_NUMBER_PATTERN = re.compile(r"\d+(\.\d+)?|\.\d+")
ZERO = Decimal("0")


def normalize_decimal(text: str) -> Decimal:
    """Normalize a comma- or period-decimal string to Decimal.

    Rules:
    - Trim whitespace
    - Replace a single comma with a period
    - Accept digits with at most one decimal separator
    - Raise ValueError for anything else (letters, several separators, sign)
    """
    if text is None:
        raise ValueError("Input text is None")

    raw = text.strip()
    if not raw:
        raise ValueError("Input text is empty")

    cleaned = raw.replace(",", ".", 1)
    if not _NUMBER_PATTERN.fullmatch(cleaned):
        raise ValueError(f"Invalid numeric format: {text!r}")

    try:
        return Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid numeric format: {text!r}") from exc


def to_number(value: Any) -> Decimal:
    """Best-effort numeric field value; anything unparseable becomes zero.

    Accepts text as typed by the user ("12,5") as well as numbers coming back
    from the shipment parser. Failures are never surfaced.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() and value >= 0 else ZERO
    if isinstance(value, (int, float)):
        return to_number(str(value))
    try:
        return normalize_decimal(str(value))
    except ValueError:
        logger.debug(f"Unparseable numeric input {value!r}, using 0")
        return ZERO
