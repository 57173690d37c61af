"""Product data model representing a species in the product catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .symbol import Symbol


@dataclass
class Product:
    """Represents a catalog species.

    Attributes:
        id: Opaque unique identifier
        name: Uppercase display name (e.g. "DORADA")
        latin_name: Optional scientific name shown next to the display name
        default_symbol: Packaging symbol new invoice lines start with
    """

    id: str
    name: str
    latin_name: Optional[str] = None
    default_symbol: Symbol = Symbol.CRATE

    def __post_init__(self):
        """Validate Product fields."""
        if not self.id:
            raise ValueError("Product id must not be empty")
        if not self.name or not self.name.strip():
            raise ValueError("Product name must not be empty")
        self.default_symbol = Symbol.parse(self.default_symbol)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Create Product from dictionary (catalog JSON record)."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            latin_name=data.get("latin_name") or None,
            default_symbol=Symbol.parse(data.get("default_symbol", "C")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "latin_name": self.latin_name,
            "default_symbol": self.default_symbol.value,
        }
