"""Computed (never stored) views over an invoice's line items."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

from .line_item import LineItem
from .symbol import Symbol


@dataclass(frozen=True)
class DerivedTotals:
    """Document-wide sums recomputed from the items on every read."""

    gross: Decimal = Decimal("0")
    net: Decimal = Decimal("0")
    quantity: Decimal = Decimal("0")
    monetary: Decimal = Decimal("0")


@dataclass(frozen=True)
class LineView:
    """One line in display order with its resolved product and computed amount."""

    item: LineItem
    product_name: str
    latin_name: Optional[str]
    amount: Decimal
    weight_error: bool


@dataclass(frozen=True)
class InvoiceView:
    """Result of aggregating an item collection against the product catalog.

    Attributes:
        lines: Lines sorted by product display name
        totals: Gross, net, quantity and monetary sums
        has_weight_error: Aggregate net above gross, or any line net above gross
        unified_symbol: None for no items, PIECE iff every line is PIECE, else CRATE
        plastic_weight: Non-reusable plastic estimate in kg (2 decimals)
    """

    lines: Tuple[LineView, ...] = field(default_factory=tuple)
    totals: DerivedTotals = field(default_factory=DerivedTotals)
    has_weight_error: bool = False
    unified_symbol: Optional[Symbol] = None
    plastic_weight: Decimal = Decimal("0.00")
