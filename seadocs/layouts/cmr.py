"""CMR international road waybill layout contract."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

from ..engine.aggregation import compute_view
from ..engine.classification import designation, destination_city, packaging_word
from ..engine.formatting import format_date, format_quantity, format_weight
from ..models.invoice_document import InvoiceDocument
from ..models.invoice_view import InvoiceView
from .base import DocumentType, ValidationRequiredError, document_filename

if TYPE_CHECKING:
    from ..catalog.catalog import Catalog
    from ..config.profile_loader import CompanyProfile


def goods_description(view: InvoiceView, goods_designation: str) -> str:
    """"<quantity> <COLIS|PIECES> D' <designation>" used on CMR and shipping note."""
    word = packaging_word(view.unified_symbol)
    return f"{format_quantity(view.totals.quantity)} {word} D' {goods_designation}"


@dataclass(frozen=True)
class CmrLayout:
    """Fields of the CMR, grouped by the box they are printed in.

    The gross weight is the prominent figure (bold, right column); the net
    weight is printed in parentheses under the goods description.
    """

    doc_type: DocumentType
    filename: str
    sender_lines: Tuple[str, ...]
    consignee_lines: Tuple[str, ...]
    carrier_lines: Tuple[str, ...]
    trailer_line: str
    delivery_place: str
    place_date: str
    attached_documents: str
    goods_line: str
    net_weight_line: str
    gross_weight: str
    signature_date: str


def build_cmr_layout(
    document: InvoiceDocument,
    catalog: Catalog,
    profile: CompanyProfile,
) -> CmrLayout:
    """Build the CMR contract.

    Raises:
        ValidationRequiredError: If the document is not VALIDATED
    """
    if not document.is_validated:
        raise ValidationRequiredError(DocumentType.CMR)

    view = compute_view(document.items, catalog, profile.plastic_factor)
    goods_designation = designation(document.items, catalog, profile.mollusk_names)
    company = profile.company
    origin = profile.origin_city
    place_date = f"{origin.capitalize()}, le {format_date(document.date)}"

    return CmrLayout(
        doc_type=DocumentType.CMR,
        filename=document_filename("CMR", document.invoice_number),
        sender_lines=(
            f"{company.get('short_name', company.get('name', ''))}.",
            str(company.get("address", "")),
            str(company.get("country", "")),
        ),
        consignee_lines=(document.client_name, document.client_address),
        carrier_lines=(
            document.transport_carrier_name.upper(),
            str(company.get("address", "")),
        ),
        trailer_line=f"Matricule: {document.trailer_plate}",
        delivery_place=destination_city(document.client_address, profile.default_destination_city),
        place_date=place_date,
        attached_documents=str(profile.documents.get("attached_documents", "Facture + EUR 1")),
        goods_line=goods_description(view, goods_designation),
        net_weight_line=f"(POIDS NET {format_weight(view.totals.net)} KG)",
        gross_weight=f"{format_weight(view.totals.gross)} KG",
        signature_date=place_date,
    )
