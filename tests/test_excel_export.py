"""Unit tests for the packing-list Excel export."""

from decimal import Decimal

import pytest
from openpyxl import load_workbook

from seadocs.catalog.catalog import Catalog
from seadocs.export.excel_export import COLUMNS, SHEET_NAME, WEIGHT_ALERT, export_packing_list
from seadocs.models.invoice_document import InvoiceDocument
from seadocs.models.line_item import LineItem


@pytest.fixture
def catalog():
    return Catalog()


@pytest.fixture
def document():
    doc = InvoiceDocument(invoice_number="5212/25")
    doc.add_items([
        LineItem(product_id="23", quantity=20, gross_weight=250, net_weight=230, unit_price="4.50"),
        LineItem(product_id="15", quantity=10, gross_weight=120, net_weight=110, unit_price=6),
    ])
    return doc


def _rows(path):
    workbook = load_workbook(path)
    assert workbook.sheetnames == [SHEET_NAME]
    return list(workbook[SHEET_NAME].iter_rows(values_only=True)), workbook[SHEET_NAME]


class TestPackingListExport:
    """Sheet contents and formatting."""

    def test_headers_and_rows(self, document, catalog, tmp_path):
        path = export_packing_list(document, catalog, tmp_path / "colisage.xlsx")
        rows, _ = _rows(path)

        assert list(rows[0]) == COLUMNS
        assert rows[1][0] == "DORADA"
        assert rows[1][1] == "SPARUS AURATA"
        assert rows[2][0] == "MERLUZA"
        assert rows[2][2] == 20
        assert rows[2][3] == "C"
        assert rows[2][7] == pytest.approx(1035.0)

    def test_total_row(self, document, catalog, tmp_path):
        path = export_packing_list(document, catalog, tmp_path / "colisage.xlsx")
        rows, sheet = _rows(path)

        total = rows[-1]
        assert len(rows) == 4
        assert total[0] == "TOTAL"
        assert total[2] == 30
        assert total[4] == 370
        assert total[5] == 340
        assert total[6] is None
        assert total[7] == pytest.approx(1695.0)
        assert sheet.cell(row=4, column=1).font.bold

    def test_number_formats(self, document, catalog, tmp_path):
        path = export_packing_list(document, catalog, tmp_path / "colisage.xlsx")
        _, sheet = _rows(path)
        assert sheet.cell(row=2, column=5).number_format == "0"
        assert sheet.cell(row=2, column=8).number_format == "0.00"

    def test_weight_alert(self, document, catalog, tmp_path):
        document.add_item(LineItem(product_id="23", gross_weight=5, net_weight=9))
        path = export_packing_list(document, catalog, tmp_path / "colisage.xlsx")
        rows, _ = _rows(path)
        flagged = [row for row in rows[1:-1] if row[8] == WEIGHT_ALERT]
        assert len(flagged) == 1
        assert rows[-1][8] == WEIGHT_ALERT

    def test_unknown_product(self, catalog, tmp_path):
        document = InvoiceDocument()
        document.add_item(LineItem(product_id="gone", quantity=1, unit_price=Decimal("2")))
        path = export_packing_list(document, catalog, tmp_path / "colisage.xlsx")
        rows, _ = _rows(path)
        assert rows[1][0] == "INCONNU"

    def test_empty_document(self, catalog, tmp_path):
        path = export_packing_list(InvoiceDocument(), catalog, tmp_path / "sub" / "colisage.xlsx")
        rows, _ = _rows(path)
        assert len(rows) == 2
        assert rows[1][0] == "TOTAL"
