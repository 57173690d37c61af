"""Transport carrier invoice layout contract."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Tuple

from ..engine.amount_words import amount_to_words
from ..engine.classification import destination_city
from ..engine.formatting import format_amount, format_date
from ..models.invoice_document import InvoiceDocument
from .base import Cell, DocumentType, TableLayout, document_filename, number_or_blank

if TYPE_CHECKING:
    from ..catalog.catalog import Catalog
    from ..config.profile_loader import CompanyProfile

TRANSPORT_COLUMNS = ("DESIGNATION", "MONTANT EUR")


@dataclass(frozen=True)
class TransportInvoiceLayout:
    """Carrier invoice for the trip, independent of the validation gate."""

    doc_type: DocumentType
    filename: str
    letterhead: Tuple[str, ...]
    place_date: str
    title: str
    client_text: str
    destination_city: str
    route_line: str
    trailer_line: str
    table: TableLayout
    amount: Decimal
    words_label: str
    words_line: str
    payment_label: str
    rib: str
    bank_lines: Tuple[str, ...]
    contact_line: str


def build_transport_invoice_layout(
    document: InvoiceDocument,
    catalog: Catalog,
    profile: CompanyProfile,
) -> TransportInvoiceLayout:
    """Build the transport invoice contract (available in any state)."""
    carrier = profile.carrier
    origin = profile.origin_city.upper()
    amount = Decimal(str(document.transport_amount or 0))
    city = destination_city(document.client_address, profile.default_destination_city)

    route_line = f"FRAIS DE TRANSPORT : {origin} - {city}"
    trailer_line = f"C/R : {document.trailer_plate.upper()}"
    words = amount_to_words(amount, profile.amount_words_mode)

    table = TableLayout(
        columns=TRANSPORT_COLUMNS,
        rows=((
            Cell(route_line, bold=True, note=trailer_line),
            Cell(format_amount(amount), align="center"),
        ),),
        footer=(
            Cell("TOTAL", align="center", bold=True),
            Cell(format_amount(amount), align="center", bold=True),
        ),
    )

    letterhead = tuple(
        str(carrier[key]) for key in ("name", "activity", "registration") if carrier.get(key)
    )

    return TransportInvoiceLayout(
        doc_type=DocumentType.TRANSPORT_INVOICE,
        filename=document_filename("Facture_Transport", document.transport_invoice_number),
        letterhead=letterhead,
        place_date=f"{origin} LE {format_date(document.date)}",
        title=f"FACTURE N° {number_or_blank(document.transport_invoice_number)}",
        client_text=f"CLIENT: {document.client_name.upper()}   {document.client_address.upper()}",
        destination_city=city,
        route_line=route_line,
        trailer_line=trailer_line,
        table=table,
        amount=amount,
        words_label="ARRETEE LA PRESENTE FACTURE A LA SOMME DE :",
        words_line=f"{words} {profile.currency_word}.",
        payment_label=str(carrier.get("payment_label", "PAYEMENT PAR VIREMENT COMPTE ")),
        rib=str(carrier.get("rib", "")),
        bank_lines=tuple(
            str(carrier[key]) for key in ("swift", "bank_name", "agency") if carrier.get(key)
        ),
        contact_line=str(carrier.get("contact_line", "")),
    )
