"""Editing helpers shared by the command line and other front ends."""

import logging
from datetime import date
from typing import Iterable, List, Optional

from .catalog.catalog import Catalog
from .config.profile_loader import CompanyProfile
from .models.invoice_document import InvoiceDocument
from .models.line_item import LineItem
from .models.product import Product

logger = logging.getLogger(__name__)


def start_document(
    catalog: Catalog,
    profile: CompanyProfile,
    today: Optional[date] = None,
) -> InvoiceDocument:
    """New DRAFT invoice with the usual defaults.

    First client (with a copy of its address), first carrier, today's date,
    the profile's exchange rate and incoterm, no lines.
    """
    first_client = catalog.clients[0] if catalog.clients else None
    return InvoiceDocument(
        date=today or date.today(),
        client_name=first_client.name if first_client else "",
        client_address=first_client.address if first_client else "",
        transport_carrier_name=catalog.transports[0] if catalog.transports else "",
        exchange_rate=profile.default_exchange_rate,
        incoterm=profile.default_incoterm,
    )


def select_client(document: InvoiceDocument, catalog: Catalog, name: str) -> None:
    """Switch the consignee, copying the catalog address into the override field.

    An unknown name is kept as typed with an empty address.
    """
    client = catalog.find_client(name)
    if client is None:
        logger.debug(f"Client {name!r} is not in the catalog")
    document.client_name = name
    document.client_address = client.address if client else ""


def add_product_line(document: InvoiceDocument, product: Product) -> LineItem:
    """Append a zeroed line for a product (symbol from the product default)."""
    return document.add_item(LineItem.for_product(product))


def merge_parsed_items(document: InvoiceDocument, items: Iterable[LineItem]) -> List[LineItem]:
    """Append parser results to the document (the document returns to DRAFT)."""
    added = document.add_items(items)
    if added:
        logger.info(f"Added {len(added)} line(s) from the shipment parser")
    return added
