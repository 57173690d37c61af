"""Unit tests for PDF rendering and PNG previews."""

from datetime import date
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pdfplumber
import pytest
from reportlab.lib.units import mm

from seadocs.catalog.catalog import Catalog
from seadocs.config.profile_loader import load_profile
from seadocs.export.documents import export_all, export_document
from seadocs.layouts import DocumentType, ValidationRequiredError, build_layout
from seadocs.models.invoice_document import InvoiceDocument
from seadocs.models.line_item import LineItem
from seadocs.render import preview
from seadocs.render.pdf_renderer import PDFRenderError, render_layout
from seadocs.render.preview import render_preview


@pytest.fixture
def catalog():
    return Catalog()


@pytest.fixture
def profile():
    return load_profile("default")


@pytest.fixture
def document():
    doc = InvoiceDocument(
        invoice_number="5212/25",
        date=date(2025, 3, 14),
        client_name="PESCNORT MAR SL",
        client_address="C/MASET N° 4 46460 SILLA VALENCIA ESPAGNE",
        transport_carrier_name="DAMJI-TRANS",
        trailer_plate="12345-A-40",
        exchange_rate=Decimal("10.47"),
        transport_invoice_number="T-88",
        transport_amount=Decimal("1200"),
    )
    doc.add_items([
        LineItem(product_id="23", quantity=20, gross_weight=250, net_weight=230, unit_price="4.50"),
        LineItem(product_id="15", quantity=10, gross_weight=120, net_weight=110, unit_price=6),
    ])
    return doc


def _words(pdf_path: Path) -> set:
    """All words on page 1 of a PDF."""
    with pdfplumber.open(str(pdf_path)) as pdf:
        assert len(pdf.pages) == 1
        return {word["text"] for word in pdf.pages[0].extract_words()}


class TestRenderLayout:
    """One A4 page per document, readable text."""

    def test_invoice(self, document, catalog, profile, tmp_path):
        layout = build_layout("invoice", document, catalog, profile)
        pdf_path = render_layout(layout, tmp_path)
        assert pdf_path == tmp_path / "Facture_5212-25.pdf"
        words = _words(pdf_path)
        assert {"FACTURE", "5212/25", "MERLUZA", "DORADA", "GENERAL", "1.695,00", "17.746,65"} <= words

    def test_cmr(self, document, catalog, profile, tmp_path):
        document.validate()
        pdf_path = render_layout(build_layout("cmr", document, catalog, profile), tmp_path)
        words = _words(pdf_path)
        assert {"CMR", "VALENCIA", "COLIS", "370", "340"} <= words

    def test_shipping_note(self, document, catalog, profile, tmp_path):
        document.validate()
        pdf_path = render_layout(build_layout("note", document, catalog, profile), tmp_path)
        assert pdf_path.name == "Note_Navire_5212-25.pdf"
        words = _words(pdf_path)
        assert {"PETICION", "EMBARQUE", "12345-A-40", "PESCNORT", "14/03/2025"} <= words

    def test_transport_invoice(self, document, catalog, profile, tmp_path):
        pdf_path = render_layout(build_layout("transport", document, catalog, profile), tmp_path)
        words = _words(pdf_path)
        assert {"DAMJI-TRANS", "T-88", "1.200,00", "MILLE", "CENTS", "EUROS."} <= words

    def test_empty_invoice_renders(self, catalog, profile, tmp_path):
        pdf_path = render_layout(build_layout("invoice", InvoiceDocument(), catalog, profile), tmp_path)
        assert pdf_path.name == "Facture_Draft.pdf"
        assert "TOTAL" in _words(pdf_path)

    def test_creates_output_dir(self, document, catalog, profile, tmp_path):
        out = tmp_path / "a" / "b"
        render_layout(build_layout("invoice", document, catalog, profile), out)
        assert (out / "Facture_5212-25.pdf").exists()

    def test_unknown_layout(self, tmp_path):
        with pytest.raises(PDFRenderError):
            render_layout(object(), tmp_path)

    def test_write_failure_is_wrapped(self, document, catalog, profile, tmp_path):
        layout = build_layout("invoice", document, catalog, profile)
        with patch("seadocs.render.pdf_renderer.canvas.Canvas.save", side_effect=OSError("disk full")):
            with pytest.raises(PDFRenderError) as exc_info:
                render_layout(layout, tmp_path)
        assert "disk full" in str(exc_info.value)


class TestInvoicePagination:
    """Long invoices continue on further pages instead of running off the sheet."""

    @pytest.fixture
    def long_document(self, catalog):
        doc = InvoiceDocument(invoice_number="900/25", client_name="PESCNORT MAR SL", trailer_plate="12345-A-40")
        doc.add_items(
            LineItem(product_id=product.id, quantity=2, gross_weight=30, net_weight=25, unit_price=3)
            for product in catalog.products
        )
        return doc

    def test_every_line_inside_a_page(self, long_document, catalog, profile, tmp_path):
        pdf_path = render_layout(build_layout("invoice", long_document, catalog, profile), tmp_path)
        body_limit = 255 * mm

        with pdfplumber.open(str(pdf_path)) as pdf:
            assert len(pdf.pages) >= 2
            words = []
            for page in pdf.pages:
                page_words = page.extract_words()
                assert all(0 <= w["top"] and w["bottom"] <= page.height for w in page_words)
                texts = {w["text"] for w in page_words}
                assert "VIREMENT" in texts
                assert "FACTURE" in texts
                words.extend(page_words)
            last_page = {w["text"] for w in pdf.pages[-1].extract_words()}

        names = {w["text"] for w in words if w["bottom"] <= body_limit}
        for product in catalog.products:
            assert set(product.name.split()) <= names, product.name
        assert "GENERAL" in names
        assert {"Incoterm:", "Remorque:", "12345-A-40"} <= last_page

    def test_short_invoice_stays_on_one_page(self, document, catalog, profile, tmp_path):
        pdf_path = render_layout(build_layout("invoice", document, catalog, profile), tmp_path)
        assert "Page" in _words(pdf_path)


class TestExportDocuments:
    """Build and render in one call."""

    def test_export_document_gated(self, document, catalog, profile, tmp_path):
        with pytest.raises(ValidationRequiredError):
            export_document("cmr", document, catalog, profile, tmp_path)
        assert not list(tmp_path.iterdir())

    def test_export_all_draft_skips_gated(self, document, catalog, profile, tmp_path, caplog):
        with caplog.at_level("WARNING"):
            written, skipped = export_all(document, catalog, profile, tmp_path)
        assert [p.name for p in written] == ["Facture_5212-25.pdf", "Facture_Transport_T-88.pdf"]
        assert skipped == [DocumentType.CMR, DocumentType.SHIPPING_NOTE]
        assert "invoice is not validated" in caplog.text

    def test_export_all_validated(self, document, catalog, profile, tmp_path):
        document.validate()
        written, skipped = export_all(document, catalog, profile, tmp_path)
        assert len(written) == 4
        assert skipped == []


class TestPreview:
    """PNG preview of page 1."""

    def test_preview_written(self, document, catalog, profile, tmp_path):
        pdf_path = render_layout(build_layout("invoice", document, catalog, profile), tmp_path)
        image_path = render_preview(pdf_path, tmp_path / "png", dpi=50)
        assert image_path == tmp_path / "png" / "Facture_5212-25_preview.png"
        assert image_path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_invalid_pdf(self, tmp_path):
        bad = tmp_path / "bad.pdf"
        bad.write_bytes(b"not a pdf")
        with pytest.raises(PDFRenderError):
            render_preview(bad, tmp_path)

    def test_missing_pymupdf(self, tmp_path):
        with patch.object(preview, "fitz", None):
            with pytest.raises(ImportError):
                render_preview(tmp_path / "x.pdf", tmp_path)
