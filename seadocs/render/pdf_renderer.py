"""Paint layout contracts onto A4 PDF pages with reportlab.

Positions in this module are millimetres measured from the top-left corner of
the page, the way the paper forms are measured; ``_Page`` converts them to
reportlab's bottom-left point coordinates.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, Table, TableStyle

from ..layouts.base import Cell, TableLayout
from ..layouts.cmr import CmrLayout
from ..layouts.invoice import InvoiceLayout
from ..layouts.shipping_note import ShippingNoteLayout
from ..layouts.transport_invoice import TransportInvoiceLayout

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = A4
FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FLAGGED_FILL = colors.HexColor("#F4C7C3")

# Lowest table edge on a page; the payment block starts at 258 mm.
PAGE_BODY_LIMIT_MM = 252.0

_ALIGNMENTS = {"left": TA_LEFT, "center": TA_CENTER, "right": TA_RIGHT}


class PDFRenderError(Exception):
    """Raised when a layout cannot be written to PDF."""
    pass


class _Page:
    """A4 pages addressed in millimetres from the top edge."""

    def __init__(self, path: Path, title: str):
        self.c = canvas.Canvas(str(path), pagesize=A4)
        self.c.setTitle(title)
        self.page_num = 1

    @staticmethod
    def y(top_mm: float) -> float:
        return PAGE_HEIGHT - top_mm * mm

    def new_page(self):
        self.c.showPage()
        self.page_num += 1

    def text(self, text, x_mm, top_mm, size=10, bold=False, align="left", underline=False):
        if not text:
            return
        font = FONT_BOLD if bold else FONT
        x = x_mm * mm
        y = self.y(top_mm)
        self.c.setFont(font, size)
        if align == "center":
            self.c.drawCentredString(x, y, text)
        elif align == "right":
            self.c.drawRightString(x, y, text)
        else:
            self.c.drawString(x, y, text)
        if underline:
            width = stringWidth(text, font, size)
            start = {"center": x - width / 2, "right": x - width}.get(align, x)
            self.c.setLineWidth(0.6)
            self.c.line(start, y - 1.5, start + width, y - 1.5)

    def wrapped(self, text, x_mm, top_mm, width_mm, size=10, bold=False, leading_mm=4.5) -> float:
        """Draw word-wrapped text; returns the top offset below the last line."""
        font = FONT_BOLD if bold else FONT
        return self.lines(simpleSplit(text or "", font, size, width_mm * mm), x_mm, top_mm,
                          size=size, bold=bold, leading_mm=leading_mm)

    def lines(self, texts: Iterable[str], x_mm, top_mm, size=10, bold=False, leading_mm=4.5) -> float:
        for line in texts:
            self.text(line, x_mm, top_mm, size=size, bold=bold)
            top_mm += leading_mm
        return top_mm

    def rule(self, x1_mm, top1_mm, x2_mm, top2_mm, width=0.5):
        self.c.setLineWidth(width)
        self.c.line(x1_mm * mm, self.y(top1_mm), x2_mm * mm, self.y(top2_mm))

    def box(self, x_mm, top_mm, width_mm, height_mm, caption: Optional[str] = None):
        self.c.setLineWidth(0.6)
        self.c.rect(x_mm * mm, self.y(top_mm + height_mm), width_mm * mm, height_mm * mm)
        if caption:
            self.text(caption, x_mm + 1.5, top_mm + 3, size=6)

    def table(self, layout: TableLayout, x_mm, top_mm, col_widths_mm: Sequence[float],
              min_body_height_mm: Optional[float] = None,
              bottom_limit_mm: float = PAGE_BODY_LIMIT_MM,
              on_new_page: Optional[Callable[[], float]] = None) -> float:
        """Draw a TableLayout; returns the top offset of the table's bottom edge.

        Rows that do not fit above ``bottom_limit_mm`` continue on a new page,
        under a repeated header row. ``on_new_page`` starts that page and
        returns where the table resumes; without it the table is drawn whole.
        """
        table = _build_table(layout, col_widths_mm, min_body_height_mm)
        width = sum(col_widths_mm) * mm

        fresh_page = False
        while True:
            available = (bottom_limit_mm - top_mm) * mm
            _, height = table.wrapOn(self.c, width, available)
            if height <= available or on_new_page is None:
                table.drawOn(self.c, x_mm * mm, self.y(top_mm + height / mm))
                return top_mm + height / mm

            parts = table.split(width, available)
            if len(parts) == 2:
                head, table = parts
                _, head_height = head.wrapOn(self.c, width, available)
                head.drawOn(self.c, x_mm * mm, self.y(top_mm + head_height / mm))
            elif fresh_page:
                # One row taller than a whole page
                table.drawOn(self.c, x_mm * mm, self.y(top_mm + height / mm))
                return top_mm + height / mm
            top_mm = on_new_page()
            fresh_page = True

    def save(self):
        self.c.showPage()
        self.c.save()


def _build_table(layout: TableLayout, col_widths_mm: Sequence[float],
                 min_body_height_mm: Optional[float]) -> Table:
    data = [[_paragraph(Cell(col, align="center", bold=True), 9) for col in layout.columns]]
    data += [[_paragraph(cell, 9) for cell in row] for row in layout.rows]
    if layout.footer:
        data.append([_paragraph(cell, 9) for cell in layout.footer])

    row_heights = None
    if min_body_height_mm is not None and len(layout.rows) == 1:
        row_heights = [None, min_body_height_mm * mm] + ([None] if layout.footer else [])

    table = Table(data, colWidths=[w * mm for w in col_widths_mm], rowHeights=row_heights, repeatRows=1)
    style = [
        ("GRID", (0, 0), (-1, -1), 0.6, colors.black),
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#E6E6E6")),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]
    for row_index, row in enumerate(layout.rows, start=1):
        for col_index, cell in enumerate(row):
            if cell.flagged:
                style.append(("BACKGROUND", (col_index, row_index), (col_index, row_index), FLAGGED_FILL))
    if layout.footer:
        style.append(("LINEABOVE", (0, -1), (-1, -1), 1.2, colors.black))
    table.setStyle(TableStyle(style))
    return table


def _paragraph(cell: Cell, size: float) -> Paragraph:
    style = ParagraphStyle(
        "cell",
        fontName=FONT_BOLD if cell.bold else FONT,
        fontSize=size,
        leading=size + 2,
        alignment=_ALIGNMENTS.get(cell.align, TA_LEFT),
    )
    markup = escape(cell.text)
    if cell.note:
        markup += f' <font name="{FONT}" size="{size - 2}">({escape(cell.note)})</font>'
    return Paragraph(markup, style)


_INVOICE_AFTER_TABLE_MM = 38.0


def _paint_invoice_footer(page: _Page, layout: InvoiceLayout):
    top = 258.0
    for line in layout.bank_lines:
        page.text(line, 105, top, size=9, bold=True, align="center")
        top += 4.5
    page.rule(15, 282, 195, 282)
    page.text(layout.contact_line, 105, 286, size=7, align="center")
    page.text(f"Page {page.page_num}", 195, 291, size=7, align="right")


def _paint_invoice(page: _Page, layout: InvoiceLayout):
    if layout.letterhead:
        page.text(layout.letterhead[0], 105, 16, size=15, bold=True, align="center")
        top = 22.0
        for line in layout.letterhead[1:]:
            page.text(line, 105, top, size=8, align="center")
            top += 4
        page.rule(15, top, 195, top, width=1)

    page.text(layout.place_date, 195, 48, size=10, align="right", underline=True)
    page.text(layout.title, 105, 60, size=13, bold=True, align="center", underline=True)

    page.text(layout.client_label, 15, 72, size=10, bold=True)
    client_bottom = page.wrapped(layout.client_text, 33, 72, 160, size=10)
    _paint_invoice_footer(page, layout)

    def continuation() -> float:
        page.new_page()
        _paint_invoice_footer(page, layout)
        page.text(f"{layout.title} (suite)", 105, 20, size=11, bold=True, align="center")
        return 28.0

    bottom = page.table(layout.table, 15, max(client_bottom + 4, 82), (24, 24, 24, 58, 22, 28),
                        on_new_page=continuation)
    if bottom + _INVOICE_AFTER_TABLE_MM > PAGE_BODY_LIMIT_MM:
        bottom = continuation()

    page.text(layout.plastic_line, 15, bottom + 8, size=9, bold=True)
    page.text(layout.home_currency_label, 15, bottom + 16, size=10)
    page.text(layout.home_currency_amount, 105, bottom + 16, size=10, bold=True)
    page.text("Incoterm:", 15, bottom + 24, size=10, bold=True)
    page.text(layout.incoterm, 45, bottom + 24, size=10)
    page.text("Transport:", 15, bottom + 30, size=10, bold=True)
    page.text(layout.transport, 45, bottom + 30, size=10)
    page.text("Remorque:", 15, bottom + 36, size=10, bold=True)
    page.text(layout.trailer, 45, bottom + 36, size=10)


def _paint_cmr(page: _Page, layout: CmrLayout):
    page.text("LETTRE DE VOITURE INTERNATIONALE", 150, 14, size=11, bold=True, align="center")
    page.text("CMR", 150, 21, size=16, bold=True, align="center")

    page.box(15, 10, 95, 30, "1  Expéditeur (nom, adresse, pays)")
    page.lines(layout.sender_lines, 18, 19, size=10)

    page.box(15, 40, 95, 30, "2  Destinataire (nom, adresse, pays)")
    page.text(layout.consignee_lines[0], 18, 49, size=10, bold=True)
    page.wrapped(" ".join(layout.consignee_lines[1:]), 18, 54, 88, size=10)

    page.box(110, 40, 85, 30, "16  Transporteur (nom, adresse, pays)")
    top = page.lines(layout.carrier_lines, 113, 49, size=10)
    page.text(layout.trailer_line, 113, top, size=10, bold=True)

    page.box(15, 70, 95, 18, "3  Lieu prévu pour la livraison de la marchandise")
    page.text(layout.delivery_place, 18, 80, size=11, bold=True)

    page.box(15, 88, 95, 18, "4  Lieu et date de la prise en charge de la marchandise")
    page.text(layout.place_date, 18, 98, size=10)

    page.box(15, 106, 95, 18, "5  Documents annexés")
    page.text(layout.attached_documents, 18, 116, size=10)

    page.box(15, 128, 140, 60, "6-9  Marques, nombre de colis, nature de la marchandise")
    top = page.wrapped(layout.goods_line, 18, 142, 134, size=11, bold=True, leading_mm=5.5)
    page.text(layout.net_weight_line, 18, top + 3, size=10)

    page.box(155, 128, 40, 60, "11  Poids brut, kg")
    page.text(layout.gross_weight, 175, 145, size=14, bold=True, align="center")

    page.box(15, 230, 95, 30, "21  Établie à / le")
    page.text(layout.signature_date, 18, 242, size=10)
    page.box(110, 230, 85, 30, "22-23  Signature et timbre")


def _paint_shipping_note(page: _Page, layout: ShippingNoteLayout):
    t = layout.template
    page.box(15, 12, 60, 26)
    page.text(t.get("stamp_caption", ""), 45, 42, size=7, align="center")

    page.text(t.get("title", ""), 140, 22, size=15, bold=True, align="center")
    page.text(t.get("subtitle", ""), 140, 29, size=10, align="center")

    top = 50.0
    for entry in t.get("agent_lines", []) + t.get("request_lines", []):
        page.text(entry.get("text", ""), 15, top, size=8, bold=bool(entry.get("bold")))
        top += 5

    voyage = t.get("voyage_captions", [])
    top += 2
    for index, caption in enumerate(voyage):
        width = 180 / max(len(voyage), 1)
        page.box(15 + index * width, top, width, 13, caption)
    top += 17

    parties = t.get("party_captions", {})
    values = (
        (parties.get("sender", ""), layout.sender),
        (parties.get("shipper", ""), layout.shipper),
        (parties.get("consignee", ""), layout.consignee),
    )
    for index, (caption, value) in enumerate(values):
        page.box(15 + index * 60, top, 60, 18, caption)
        page.wrapped(value, 17 + index * 60, top + 10, 56, size=10, bold=True)
    top += 24

    page.text(t.get("declaration_title", ""), 105, top, size=10, bold=True, align="center")
    page.text(t.get("declaration_subtitle", ""), 105, top + 4.5, size=8, align="center")
    top += 8

    captions = t.get("column_captions", {})

    def header(key):
        note = captions.get(f"{key}_note")
        return f"{captions.get(key, '')}" + (f" {note}" if note else "")

    goods = TableLayout(
        columns=tuple(header(key) for key in ("packages", "marks", "kind", "description", "weight", "volume")),
        rows=((
            Cell(""),
            Cell(layout.marks, align="center"),
            Cell(""),
            Cell(layout.description, bold=True),
            Cell(layout.gross_weight, align="center", bold=True),
            Cell(""),
        ),),
    )
    top = page.table(goods, 15, top, (22, 30, 20, 62, 26, 20), min_body_height_mm=38) + 8

    for entry in t.get("footer_lines", []):
        bold = bool(entry.get("bold"))
        page.text(entry.get("left", ""), 15, top, size=7.5, bold=bold)
        page.text(entry.get("right", ""), 135, top, size=7.5, bold=bold)
        top += 4.5

    page.text(f"{layout.date_label}{layout.date}", 15, 272, size=10, bold=True)
    page.text(t.get("signature", ""), 135, 272, size=9)


def _paint_transport_invoice(page: _Page, layout: TransportInvoiceLayout):
    if layout.letterhead:
        page.text(layout.letterhead[0], 105, 16, size=15, bold=True, align="center")
        top = 22.0
        for line in layout.letterhead[1:]:
            page.text(line, 105, top, size=8, align="center")
            top += 4
        page.rule(15, top, 195, top, width=1)

    page.text(layout.place_date, 195, 48, size=10, align="right")
    page.text(layout.title, 105, 60, size=13, bold=True, align="center", underline=True)
    client_bottom = page.wrapped(layout.client_text, 15, 72, 180, size=10, bold=True)

    bottom = page.table(layout.table, 15, max(client_bottom + 6, 84), (130, 50))

    page.text(layout.words_label, 15, bottom + 12, size=10, bold=True, underline=True)
    page.wrapped(layout.words_line, 15, bottom + 19, 180, size=10, bold=True)

    page.text(f"{layout.payment_label}{layout.rib}", 105, 256, size=9, bold=True, align="center")
    page.text(" - ".join(layout.bank_lines), 105, 261, size=9, align="center")
    page.rule(15, 282, 195, 282)
    page.text(layout.contact_line, 105, 286, size=7, align="center")


_PAINTERS = {
    InvoiceLayout: _paint_invoice,
    CmrLayout: _paint_cmr,
    ShippingNoteLayout: _paint_shipping_note,
    TransportInvoiceLayout: _paint_transport_invoice,
}


def render_layout(layout, output_dir) -> Path:
    """Write a layout contract to ``<output_dir>/<layout.filename>``.

    Args:
        layout: One of InvoiceLayout, CmrLayout, ShippingNoteLayout, TransportInvoiceLayout
        output_dir: Directory for the PDF (created if missing)

    Returns:
        Path to the written PDF

    Raises:
        PDFRenderError: If the layout type is unknown or writing fails
    """
    painter = _PAINTERS.get(type(layout))
    if painter is None:
        raise PDFRenderError(f"No renderer for layout type {type(layout).__name__}")

    pdf_path = Path(output_dir) / layout.filename
    try:
        pdf_path.parent.mkdir(parents=True, exist_ok=True)
        page = _Page(pdf_path, title=pdf_path.stem)
        painter(page, layout)
        page.save()
    except Exception as e:
        raise PDFRenderError(f"Failed to render {layout.filename}: {str(e)}") from e

    logger.info(f"Wrote {pdf_path}")
    return pdf_path
