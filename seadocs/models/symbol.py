"""Packaging unit symbol carried by products and invoice lines."""

from __future__ import annotations

from enum import Enum
from typing import Any


class Symbol(str, Enum):
    """Packaging unit: crate (colis) or single piece."""

    CRATE = "C"
    PIECE = "P"

    @classmethod
    def parse(cls, value: Any) -> "Symbol":
        """Parse "C"/"P" (any case) or an existing Symbol; anything else is a crate."""
        if isinstance(value, Symbol):
            return value
        if isinstance(value, str) and value.strip().upper() == "P":
            return cls.PIECE
        return cls.CRATE
