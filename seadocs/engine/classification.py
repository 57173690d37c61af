"""Derived classification text shared by the CMR, shipping note and invoice."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional

from ..models.line_item import LineItem
from ..models.symbol import Symbol

if TYPE_CHECKING:
    from ..catalog.catalog import Catalog

DEFAULT_MOLLUSK_NAMES = ("ALMENDRITAS", "CALAMARS", "CHOCOS", "PUNTILLAS")
DEFAULT_DESTINATION_CITY = "CADIZ"

FRESH_SUFFIX = "FRAIS"
FISH_DESIGNATION = "POISSONS FRAIS"
FISH_AND_MOLLUSK_DESIGNATION = "POISSONS ET MOLLUSQUES FRAIS"

_TOKEN_PUNCTUATION = "()[],;:."


def species_names(items: Iterable[LineItem], catalog: Catalog) -> List[str]:
    """Distinct resolved product names in first-seen order."""
    seen: List[str] = []
    for item in items:
        product = catalog.find_product(item.product_id)
        if product and product.name not in seen:
            seen.append(product.name)
    return seen


def designation(
    items: Iterable[LineItem],
    catalog: Catalog,
    mollusk_names: Iterable[str] = DEFAULT_MOLLUSK_NAMES,
) -> str:
    """Goods designation printed on the transport documents.

    A single species gives "<NAME> FRAIS"; several species give
    "POISSONS ET MOLLUSQUES FRAIS" when one of them is a mollusk, otherwise
    "POISSONS FRAIS". Lines whose product cannot be resolved are ignored.
    """
    names = species_names(items, catalog)
    if len(names) == 1:
        return f"{names[0]} {FRESH_SUFFIX}"

    mollusks = {name.upper() for name in mollusk_names}
    if any(name.upper() in mollusks for name in names):
        return FISH_AND_MOLLUSK_DESIGNATION
    return FISH_DESIGNATION


def destination_city(address: str, default: str = DEFAULT_DESTINATION_CITY) -> str:
    """Guess the destination city from a free-text address.

    Heuristic: the second-to-last whitespace-separated token, since addresses
    usually end with "<CITY> <COUNTRY>". Short addresses fall back to
    ``default``. Not a guarantee; odd addresses give odd cities.
    """
    tokens = (address or "").split()
    if len(tokens) < 2:
        return default.upper()
    city = tokens[-2].strip(_TOKEN_PUNCTUATION)
    return city.upper() if city else default.upper()


def packaging_word(symbol: Optional[Symbol]) -> str:
    """Word used in goods descriptions: PIECES for pieces, COLIS otherwise."""
    return "PIECES" if symbol is Symbol.PIECE else "COLIS"
