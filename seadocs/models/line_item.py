"""LineItem data model representing one species row on an invoice."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Dict

from ..engine.number_normalizer import to_number
from .symbol import Symbol

if TYPE_CHECKING:
    from .product import Product


_NUMERIC_FIELDS = ("quantity", "gross_weight", "net_weight", "unit_price")


def new_item_id() -> str:
    """Short random identifier for a new line."""
    return uuid.uuid4().hex[:9]


def _as_decimal(name: str, value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str):
        # Typed text ("12,5"); unreadable input counts as zero
        return to_number(value)
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"LineItem {name} must be numeric, got {value!r}") from exc


@dataclass(frozen=True)
class LineItem:
    """Represents one invoice line.

    Instances are immutable: edits go through ``InvoiceDocument.update_item``,
    which swaps in a modified copy and returns the document to DRAFT.

    Attributes:
        product_id: Catalog product reference (may dangle; shown as unknown)
        quantity: Number of crates or pieces
        symbol: Packaging symbol for this line (can differ from the product default)
        gross_weight: Shipped weight in kg, packaging included
        net_weight: Product weight in kg
        unit_price: Price per net kg in invoice currency
        id: Line identifier
    """

    product_id: str
    quantity: Decimal = Decimal("0")
    symbol: Symbol = Symbol.CRATE
    gross_weight: Decimal = Decimal("0")
    net_weight: Decimal = Decimal("0")
    unit_price: Decimal = Decimal("0")
    id: str = field(default_factory=new_item_id)

    def __post_init__(self):
        """Coerce numbers to Decimal and reject negatives."""
        for name in _NUMERIC_FIELDS:
            value = _as_decimal(name, getattr(self, name))
            if not value.is_finite() or value < 0:
                raise ValueError(f"LineItem {name} must be >= 0, got {value}")
            object.__setattr__(self, name, value)
        object.__setattr__(self, "symbol", Symbol.parse(self.symbol))

    @property
    def amount(self) -> Decimal:
        """Line amount: net weight times unit price."""
        return self.net_weight * self.unit_price

    @property
    def has_weight_error(self) -> bool:
        """Net weight above gross weight (soft warning, never raised)."""
        return self.net_weight > self.gross_weight

    @classmethod
    def for_product(cls, product: Product) -> "LineItem":
        """Zeroed line whose symbol defaults from the product."""
        return cls(product_id=product.id, symbol=product.default_symbol)

    def with_changes(self, **changes: Any) -> "LineItem":
        """Copy of this line with the given fields replaced."""
        unknown = set(changes) - set(_NUMERIC_FIELDS) - {"symbol", "product_id"}
        if unknown:
            raise ValueError(f"Unknown LineItem field(s): {', '.join(sorted(unknown))}")
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LineItem":
        """Create LineItem from dictionary."""
        kwargs: Dict[str, Any] = {
            "product_id": str(data.get("product_id", "")),
            "symbol": Symbol.parse(data.get("symbol", "C")),
        }
        for name in _NUMERIC_FIELDS:
            kwargs[name] = data.get(name, 0) or 0
        if data.get("id"):
            kwargs["id"] = str(data["id"])
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (numbers as strings to keep Decimal precision)."""
        return {
            "id": self.id,
            "product_id": self.product_id,
            "quantity": str(self.quantity),
            "symbol": self.symbol.value,
            "gross_weight": str(self.gross_weight),
            "net_weight": str(self.net_weight),
            "unit_price": str(self.unit_price),
        }
