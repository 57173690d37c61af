"""Line item aggregation: display order, per-line amounts and document totals."""

from __future__ import annotations

import logging
import unicodedata
from decimal import Decimal, ROUND_HALF_UP
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

from ..models.invoice_view import DerivedTotals, InvoiceView, LineView
from ..models.line_item import LineItem
from ..models.symbol import Symbol

if TYPE_CHECKING:
    from ..catalog.catalog import Catalog

logger = logging.getLogger(__name__)

UNKNOWN_PRODUCT_NAME = "INCONNU"
DEFAULT_PLASTIC_FACTOR = Decimal("0.006")


def collation_key(name: str) -> Tuple[str, str]:
    """Locale-aware sort key: accents and case ignored, exact name as tie-break."""
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), name)


def _product_name(item: LineItem, catalog: Catalog) -> str:
    product = catalog.find_product(item.product_id)
    return product.name if product else ""


def sort_items(items: Iterable[LineItem], catalog: Catalog) -> List[LineItem]:
    """Items ordered by product display name; unresolved products sort first.

    The sort is stable, so re-sorting a sorted list leaves it unchanged.
    """
    return sorted(items, key=lambda item: collation_key(_product_name(item, catalog)))


def compute_totals(items: Iterable[LineItem]) -> DerivedTotals:
    """Gross, net, quantity and monetary sums."""
    gross = net = quantity = monetary = Decimal("0")
    for item in items:
        gross += item.gross_weight
        net += item.net_weight
        quantity += item.quantity
        monetary += item.amount
    return DerivedTotals(gross=gross, net=net, quantity=quantity, monetary=monetary)


def unified_symbol(items: Sequence[LineItem]) -> Optional[Symbol]:
    """Document-level packaging symbol.

    Any crate line makes the whole shipment crates; PIECE only when every line
    is PIECE. No items gives None.
    """
    if not items:
        return None
    if all(item.symbol is Symbol.PIECE for item in items):
        return Symbol.PIECE
    return Symbol.CRATE


def plastic_weight(gross_total: Decimal, factor: Decimal = DEFAULT_PLASTIC_FACTOR) -> Decimal:
    """Non-reusable plastic estimate printed on the commercial invoice, in kg."""
    return (Decimal(str(gross_total)) * Decimal(str(factor))).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )


def has_weight_error(totals: DerivedTotals, items: Iterable[LineItem]) -> bool:
    """Aggregate net above gross, or any single line net above gross."""
    return totals.net > totals.gross or any(item.has_weight_error for item in items)


def compute_view(
    items: Iterable[LineItem],
    catalog: Catalog,
    plastic_factor: Decimal = DEFAULT_PLASTIC_FACTOR,
) -> InvoiceView:
    """Aggregate an item collection against the product catalog.

    Pure function of its inputs: nothing is cached, so the result always
    reflects the current items.

    Args:
        items: Line items in any order
        catalog: Catalog used to resolve product names
        plastic_factor: Plastic weight per gross kg

    Returns:
        InvoiceView with sorted lines, totals and warning flags
    """
    ordered = sort_items(items, catalog)

    lines = []
    for item in ordered:
        product = catalog.find_product(item.product_id)
        if product is None:
            logger.debug(f"Line {item.id} references unknown product {item.product_id!r}")
        lines.append(
            LineView(
                item=item,
                product_name=product.name if product else UNKNOWN_PRODUCT_NAME,
                latin_name=product.latin_name if product else None,
                amount=item.amount,
                weight_error=item.has_weight_error,
            )
        )

    totals = compute_totals(ordered)
    weight_error = has_weight_error(totals, ordered)
    if weight_error:
        logger.warning(
            f"Net weight exceeds gross weight (net {totals.net} kg, gross {totals.gross} kg)"
        )

    return InvoiceView(
        lines=tuple(lines),
        totals=totals,
        has_weight_error=weight_error,
        unified_symbol=unified_symbol(ordered),
        plastic_weight=plastic_weight(totals.gross, plastic_factor),
    )
