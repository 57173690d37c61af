"""Build and render the printable documents for one invoice."""

import logging
from pathlib import Path
from typing import List, Tuple

from ..layouts import DocumentType, ValidationRequiredError, build_layout
from ..models.invoice_document import InvoiceDocument
from ..render.pdf_renderer import render_layout

logger = logging.getLogger(__name__)


def export_document(doc_type, document: InvoiceDocument, catalog, profile, output_dir) -> Path:
    """Export one document type to PDF.

    Raises:
        ValidationRequiredError: CMR or shipping note requested from a DRAFT
        PDFRenderError: If writing the PDF fails
    """
    layout = build_layout(doc_type, document, catalog, profile)
    return render_layout(layout, output_dir)


def export_all(
    document: InvoiceDocument, catalog, profile, output_dir
) -> Tuple[List[Path], List[DocumentType]]:
    """Export every document the current state allows.

    Returns:
        (written PDF paths, document types skipped because the invoice is a DRAFT)
    """
    written: List[Path] = []
    skipped: List[DocumentType] = []
    for doc_type in DocumentType:
        try:
            written.append(export_document(doc_type, document, catalog, profile, output_dir))
        except ValidationRequiredError:
            logger.warning(f"Skipping {doc_type.value}: invoice is not validated")
            skipped.append(doc_type)
    return written, skipped
