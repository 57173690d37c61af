"""InvoiceDocument aggregate root and its DRAFT/VALIDATED lifecycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple

from ..engine.number_normalizer import to_number
from .line_item import LineItem

logger = logging.getLogger(__name__)


class DocumentState(str, Enum):
    """Document lifecycle shared by every paper form derived from one invoice."""

    DRAFT = "DRAFT"
    VALIDATED = "VALIDATED"


# Attributes whose assignment does not count as a document mutation.
_UNTRACKED = frozenset({"state", "_items"})

_NUMERIC_HEADER_FIELDS = ("exchange_rate", "transport_amount")


def _header_number(name: str, value: Any) -> Decimal:
    """Coerce a numeric header field; typed text goes through the normalizer."""
    if value is None or isinstance(value, str):
        return to_number(value)
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"{name} must be numeric, got {value!r}") from exc
    if not number.is_finite() or number < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return number


@dataclass
class InvoiceDocument:
    """Invoice being prepared for one shipment.

    Every header assignment and every item operation returns the document to
    DRAFT; only ``validate()`` moves it to VALIDATED. The transition lives in
    ``__setattr__``/``_touch`` so callers cannot forget it.

    Attributes:
        invoice_number: Commercial invoice number (free text, e.g. "5212/25")
        date: Invoice date
        client_name: Consignee name, the join key into the client catalog
        client_address: Per-shipment address override, copied from the catalog
            at selection time and never written back
        transport_carrier_name: Carrier name
        trailer_plate: Truck/trailer registration, free text
        exchange_rate: Home-currency units per invoice-currency unit
        incoterm: Delivery term code
        transport_invoice_number: Carrier invoice number
        transport_amount: Carrier invoice amount
        state: DRAFT or VALIDATED
    """

    invoice_number: str = ""
    date: date = field(default_factory=date.today)
    client_name: str = ""
    client_address: str = ""
    transport_carrier_name: str = ""
    trailer_plate: str = ""
    exchange_rate: Decimal = Decimal("0")
    incoterm: str = "FOB"
    transport_invoice_number: str = ""
    transport_amount: Decimal = Decimal("0")
    _items: List[LineItem] = field(default_factory=list, repr=False)
    state: DocumentState = DocumentState.DRAFT

    def __post_init__(self):
        """Copy the item list and start in DRAFT."""
        self._items = list(self._items)
        self.state = DocumentState.DRAFT

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _NUMERIC_HEADER_FIELDS:
            value = _header_number(name, value)
        super().__setattr__(name, value)
        if name not in _UNTRACKED and "state" in self.__dict__:
            self._touch()

    def _touch(self) -> None:
        if self.state is not DocumentState.DRAFT:
            logger.debug("Document modified, back to DRAFT")
        super().__setattr__("state", DocumentState.DRAFT)

    # -- lifecycle -----------------------------------------------------

    @property
    def is_validated(self) -> bool:
        return self.state is DocumentState.VALIDATED

    def validate(self) -> None:
        """Explicit user confirmation that the document is ready to print."""
        self.state = DocumentState.VALIDATED

    def reset(self) -> None:
        """Explicit return to DRAFT."""
        self._touch()

    # -- items ---------------------------------------------------------

    @property
    def items(self) -> Tuple[LineItem, ...]:
        """Lines in insertion order (read-only view)."""
        return tuple(self._items)

    def add_item(self, item: LineItem) -> LineItem:
        self._items.append(item)
        self._touch()
        return item

    def add_items(self, items: Iterable[LineItem]) -> List[LineItem]:
        added = list(items)
        self._items.extend(added)
        self._touch()
        return added

    def update_item(self, item_id: str, **changes: Any) -> LineItem:
        """Replace fields of one line; raises KeyError for an unknown id."""
        for index, item in enumerate(self._items):
            if item.id == item_id:
                updated = item.with_changes(**changes)
                self._items[index] = updated
                self._touch()
                return updated
        raise KeyError(f"No line item with id {item_id!r}")

    def remove_item(self, item_id: str) -> None:
        """Remove one line; raises KeyError for an unknown id."""
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            raise KeyError(f"No line item with id {item_id!r}")
        self._items = remaining
        self._touch()

    # -- serialization -------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InvoiceDocument":
        """Create InvoiceDocument from dictionary (JSON document file).

        The lifecycle state is not serialized; a loaded document is a DRAFT.
        """
        raw_date = data.get("date")
        if isinstance(raw_date, date):
            doc_date = raw_date
        elif raw_date:
            doc_date = date.fromisoformat(str(raw_date))
        else:
            doc_date = date.today()

        return cls(
            invoice_number=str(data.get("invoice_number", "") or ""),
            date=doc_date,
            client_name=data.get("client_name", "") or "",
            client_address=data.get("client_address", "") or "",
            transport_carrier_name=data.get("transport_carrier_name", "") or "",
            trailer_plate=data.get("trailer_plate", "") or "",
            exchange_rate=data.get("exchange_rate", 0),
            incoterm=data.get("incoterm", "FOB") or "FOB",
            transport_invoice_number=str(data.get("transport_invoice_number", "") or ""),
            transport_amount=data.get("transport_amount", 0),
            _items=[LineItem.from_dict(item) for item in data.get("items", [])],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {}
        for f in fields(self):
            if f.name in _UNTRACKED:
                continue
            value = getattr(self, f.name)
            if isinstance(value, date):
                value = value.isoformat()
            elif isinstance(value, Decimal):
                value = str(value)
            data[f.name] = value
        data["items"] = [item.to_dict() for item in self._items]
        return data
