"""Client data model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class Client:
    """Represents a consignee in the client catalog.

    Invoices reference a client by ``name``, not by ``id``, so names must be
    unique within the catalog.

    Attributes:
        id: Opaque identifier
        name: Display name, used as the lookup key
        address: Free-text postal address
    """

    id: str
    name: str
    address: str = ""

    def __post_init__(self):
        """Validate Client fields."""
        if not self.name or not self.name.strip():
            raise ValueError("Client name must not be empty")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Client":
        """Create Client from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            address=data.get("address", "") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"id": self.id, "name": self.name, "address": self.address}
