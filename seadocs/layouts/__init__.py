"""Positional layout contracts for the four printed documents."""

from .base import DocumentType, ValidationRequiredError, document_filename
from .cmr import CmrLayout, build_cmr_layout
from .invoice import InvoiceLayout, build_invoice_layout
from .shipping_note import ShippingNoteLayout, build_shipping_note_layout
from .transport_invoice import TransportInvoiceLayout, build_transport_invoice_layout

_BUILDERS = {
    DocumentType.INVOICE: build_invoice_layout,
    DocumentType.CMR: build_cmr_layout,
    DocumentType.SHIPPING_NOTE: build_shipping_note_layout,
    DocumentType.TRANSPORT_INVOICE: build_transport_invoice_layout,
}


def build_layout(doc_type, document, catalog, profile):
    """Build the layout contract for one document type.

    Args:
        doc_type: DocumentType or its string value ("invoice", "cmr", "note", "transport")
        document: InvoiceDocument being edited
        catalog: Catalog used to resolve product names
        profile: Active CompanyProfile

    Raises:
        ValidationRequiredError: CMR or shipping note requested from a DRAFT
        ValueError: Unknown document type
    """
    doc_type = DocumentType(doc_type)
    return _BUILDERS[doc_type](document, catalog, profile)


__all__ = [
    "DocumentType",
    "ValidationRequiredError",
    "document_filename",
    "build_layout",
    "InvoiceLayout",
    "CmrLayout",
    "ShippingNoteLayout",
    "TransportInvoiceLayout",
]
