"""Structured shapes returned by the shipment parser backends."""

from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..engine.number_normalizer import to_number


class ParsedItem(BaseModel):
    """One species row suggested by the parser.

    Numbers arrive as JSON numbers or as text with a decimal comma ("12,5");
    anything unreadable or negative becomes 0. Both snake_case and the
    camelCase keys used by hosted parser services are accepted.
    """
    model_config = ConfigDict(populate_by_name=True)

    fish_name_suggestion: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("fish_name_suggestion", "fishNameSuggestion"),
        description="Species name as written in the text",
    )
    quantity: float = Field(0, description="Number of crates or pieces")
    symbol: str = Field("C", description="C (crates) or P (pieces)")
    gross_weight: float = Field(
        0,
        validation_alias=AliasChoices("gross_weight", "brutWeight", "brut_weight"),
        description="Gross weight in KG",
    )
    net_weight: float = Field(
        0,
        validation_alias=AliasChoices("net_weight", "netWeight"),
        description="Net weight in KG",
    )
    unit_price: float = Field(
        0,
        validation_alias=AliasChoices("unit_price", "unitPrice"),
        description="Price per net KG in EUR",
    )

    @field_validator("quantity", "gross_weight", "net_weight", "unit_price", mode="before")
    @classmethod
    def _lenient_number(cls, value: Any) -> float:
        return float(to_number(value))

    @field_validator("symbol", mode="before")
    @classmethod
    def _symbol(cls, value: Any) -> str:
        return "P" if str(value or "").strip().upper() == "P" else "C"


class ParsedShipment(BaseModel):
    """Top-level parser response: the list of suggested rows."""
    items: List[ParsedItem] = Field(default_factory=list)
