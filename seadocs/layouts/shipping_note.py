"""Ship-loading note (PETICION DE EMBARQUE / Note d'embarquement) layout contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict

from ..engine.aggregation import compute_view
from ..engine.classification import designation
from ..engine.formatting import format_date, format_weight
from ..models.invoice_document import InvoiceDocument
from .base import DocumentType, ValidationRequiredError, document_filename
from .cmr import goods_description

if TYPE_CHECKING:
    from ..catalog.catalog import Catalog
    from ..config.profile_loader import CompanyProfile


@dataclass(frozen=True)
class ShippingNoteLayout:
    """Variable fields of the loading note plus its fixed bilingual template.

    ``marks`` is the trailer plate exactly as typed (uppercased, wrapped by the
    renderer); it is never parsed.
    """

    doc_type: DocumentType
    filename: str
    sender: str
    shipper: str
    consignee: str
    marks: str
    description: str
    gross_weight: str
    date_label: str
    date: str
    template: Dict[str, Any] = field(default_factory=dict)


def build_shipping_note_layout(
    document: InvoiceDocument,
    catalog: Catalog,
    profile: CompanyProfile,
) -> ShippingNoteLayout:
    """Build the shipping note contract.

    Raises:
        ValidationRequiredError: If the document is not VALIDATED
    """
    if not document.is_validated:
        raise ValidationRequiredError(DocumentType.SHIPPING_NOTE)

    view = compute_view(document.items, catalog, profile.plastic_factor)
    goods_designation = designation(document.items, catalog, profile.mollusk_names)
    template = dict(profile.shipping_note)
    company = profile.company

    return ShippingNoteLayout(
        doc_type=DocumentType.SHIPPING_NOTE,
        filename=document_filename("Note_Navire", document.invoice_number),
        sender=str(company.get("short_name", company.get("name", ""))),
        shipper=document.transport_carrier_name.upper(),
        consignee=document.client_name.upper(),
        marks=document.trailer_plate.upper(),
        description=goods_description(view, goods_designation).upper(),
        gross_weight=f"{format_weight(view.totals.gross)} KG",
        date_label=str(template.get("date_label", f"{profile.origin_city} , Le : ")),
        date=format_date(document.date),
        template=template,
    )
