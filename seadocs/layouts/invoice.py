"""Commercial invoice (FACTURE) layout contract."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Tuple

from ..engine.aggregation import compute_view
from ..engine.formatting import (
    format_amount,
    format_date,
    format_decimal,
    format_quantity,
    format_weight,
)
from ..models.invoice_document import InvoiceDocument
from .base import Cell, DocumentType, TableLayout, document_filename, number_or_blank

if TYPE_CHECKING:
    from ..catalog.catalog import Catalog
    from ..config.profile_loader import CompanyProfile


INVOICE_COLUMNS = (
    "Quantité",
    "P. Brut (KG)",
    "P. Net (KG)",
    "Designation",
    "P. Unit",
    "Montant (EUR)",
)


@dataclass(frozen=True)
class InvoiceLayout:
    """Everything the commercial invoice prints, top to bottom.

    Attributes:
        letterhead: Company name followed by activity/registration lines
        place_date: "Tanger, Le: dd/mm/yyyy", right aligned, underlined
        title: "FACTURE N° ...", centred, underlined
        client_text: "<CLIENT> - <address>" after the "CLIENT:" label
        table: Item table with totals footer
        plastic_line: Non-reusable plastic declaration under the table
        home_currency_label / home_currency_amount: Converted total, same line
        incoterm / transport / trailer: Label-value lines
        bank_lines: Payment block centred at the page bottom
        contact_line: Small print footer
        weight_warning: Net above gross somewhere; shown, never blocking
    """

    doc_type: DocumentType
    filename: str
    letterhead: Tuple[str, ...]
    place_date: str
    title: str
    client_label: str
    client_text: str
    table: TableLayout
    plastic_line: str
    home_currency_label: str
    home_currency_amount: str
    home_currency_total: Decimal
    incoterm: str
    transport: str
    trailer: str
    bank_lines: Tuple[str, ...]
    contact_line: str
    weight_warning: bool


def build_invoice_layout(
    document: InvoiceDocument,
    catalog: Catalog,
    profile: CompanyProfile,
) -> InvoiceLayout:
    """Build the commercial invoice contract (available in any state)."""
    view = compute_view(document.items, catalog, profile.plastic_factor)
    totals = view.totals
    company = profile.company
    origin = profile.origin_city

    rows = []
    for line in view.lines:
        item = line.item
        rows.append((
            Cell(f"{format_quantity(item.quantity)} {item.symbol.value}", align="right"),
            Cell(format_weight(item.gross_weight), align="center", flagged=line.weight_error),
            Cell(format_weight(item.net_weight), align="center", flagged=line.weight_error),
            Cell(line.product_name, bold=True, note=line.latin_name),
            Cell(format_amount(item.unit_price), align="right"),
            Cell(format_amount(line.amount), align="right"),
        ))

    symbol = view.unified_symbol.value if view.unified_symbol else ""
    footer = (
        Cell(f"{format_quantity(totals.quantity)} {symbol}".strip(), align="right", bold=True),
        Cell(format_weight(totals.gross), align="center", bold=True),
        Cell(format_weight(totals.net), align="center", bold=True),
        Cell("TOTAL GENERAL", bold=True),
        Cell(""),
        Cell(f"{format_amount(totals.monetary)} €", align="right", bold=True),
    )

    home_total = totals.monetary * Decimal(str(document.exchange_rate))

    letterhead = tuple(
        str(company[key]) for key in ("name", "activity", "registration", "head_office")
        if company.get(key)
    )

    return InvoiceLayout(
        doc_type=DocumentType.INVOICE,
        filename=document_filename("Facture", document.invoice_number),
        letterhead=letterhead,
        place_date=f"{origin.capitalize()}, Le: {format_date(document.date)}",
        title=f"FACTURE N° {number_or_blank(document.invoice_number)}",
        client_label="CLIENT:",
        client_text=f"{document.client_name} - {document.client_address}",
        table=TableLayout(columns=INVOICE_COLUMNS, rows=tuple(rows), footer=footer),
        plastic_line=(
            "TOTAL PESO NETO DE PLASTICO NO REUTILIZABLE: "
            f"{format_decimal(view.plastic_weight, 2)} KG NETOS"
        ),
        home_currency_label="Contre valeur approximative en Dirhams:",
        home_currency_amount=f"{format_amount(home_total)} {profile.home_currency}",
        home_currency_total=home_total,
        incoterm=f"{document.incoterm} {origin}".strip(),
        transport=document.transport_carrier_name,
        trailer=document.trailer_plate,
        bank_lines=tuple(str(line) for line in profile.bank.get("lines", [])),
        contact_line=str(company.get("contact_line", "")),
        weight_warning=view.has_weight_error,
    )
