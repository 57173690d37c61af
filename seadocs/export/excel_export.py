"""Packing-list spreadsheet export with French column names."""

import logging
from pathlib import Path

import pandas as pd
from openpyxl.styles import Font
from openpyxl.styles.numbers import FORMAT_NUMBER, FORMAT_NUMBER_00

from ..engine.aggregation import compute_view
from ..models.invoice_document import InvoiceDocument

logger = logging.getLogger(__name__)

SHEET_NAME = "Colisage"
COLUMNS = [
    "Espèce",
    "Nom latin",
    "Quantité",
    "Symbole",
    "P. Brut (KG)",
    "P. Net (KG)",
    "P. Unit",
    "Montant (EUR)",
    "Alerte poids",
]
WEIGHT_ALERT = "NET > BRUT"


def export_packing_list(document: InvoiceDocument, catalog, output_path) -> str:
    """Export the invoice lines as a packing list.

    One row per line in display order, then a TOTAL row with the same totals as
    the invoice footer. Lines whose net weight exceeds the gross weight are
    flagged in "Alerte poids".

    Args:
        document: Invoice being edited
        catalog: Catalog used to resolve species names
        output_path: Path to output .xlsx file

    Returns:
        Path to created Excel file
    """
    view = compute_view(document.items, catalog)

    rows = []
    for line in view.lines:
        item = line.item
        rows.append({
            "Espèce": line.product_name,
            "Nom latin": line.latin_name or "",
            "Quantité": float(item.quantity),
            "Symbole": item.symbol.value,
            "P. Brut (KG)": float(item.gross_weight),
            "P. Net (KG)": float(item.net_weight),
            "P. Unit": float(item.unit_price),
            "Montant (EUR)": float(line.amount),
            "Alerte poids": WEIGHT_ALERT if line.weight_error else "",
        })

    totals = view.totals
    rows.append({
        "Espèce": "TOTAL",
        "Nom latin": "",
        "Quantité": float(totals.quantity),
        "Symbole": view.unified_symbol.value if view.unified_symbol else "",
        "P. Brut (KG)": float(totals.gross),
        "P. Net (KG)": float(totals.net),
        "P. Unit": None,
        "Montant (EUR)": float(totals.monetary),
        "Alerte poids": WEIGHT_ALERT if view.has_weight_error else "",
    })

    df = pd.DataFrame(rows, columns=COLUMNS)

    output_path_obj = Path(output_path)
    output_path_obj.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(output_path_obj, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=SHEET_NAME)
        worksheet = writer.sheets[SHEET_NAME]

        def _idx(name: str) -> int:
            return df.columns.get_loc(name)

        for row in worksheet.iter_rows(min_row=2, max_row=worksheet.max_row):
            row[_idx("Quantité")].number_format = FORMAT_NUMBER
            row[_idx("P. Brut (KG)")].number_format = FORMAT_NUMBER
            row[_idx("P. Net (KG)")].number_format = FORMAT_NUMBER
            row[_idx("P. Unit")].number_format = FORMAT_NUMBER_00
            row[_idx("Montant (EUR)")].number_format = FORMAT_NUMBER_00

        for cell in worksheet[worksheet.max_row]:
            cell.font = Font(bold=True)

    logger.info(f"Packing list written to {output_path_obj} ({len(view.lines)} lines)")
    return str(output_path_obj)
