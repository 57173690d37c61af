"""Shared pieces of the document layout contracts."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class DocumentType(str, Enum):
    """The four paper forms produced from one invoice."""

    INVOICE = "invoice"
    CMR = "cmr"
    SHIPPING_NOTE = "note"
    TRANSPORT_INVOICE = "transport"

    @property
    def requires_validation(self) -> bool:
        """CMR and shipping note can only be printed from a VALIDATED document."""
        return self in (DocumentType.CMR, DocumentType.SHIPPING_NOTE)


class ValidationRequiredError(Exception):
    """Raised when a gated document is requested while the invoice is a DRAFT."""

    def __init__(self, doc_type: DocumentType):
        self.doc_type = doc_type
        super().__init__(
            f"Document '{doc_type.value}' requires a validated invoice; validate it first"
        )


@dataclass(frozen=True)
class Cell:
    """Table cell: main text, optional smaller note printed after it.

    ``flagged`` marks a value the user should check (net above gross);
    renderers highlight it.
    """

    text: str
    align: str = "left"
    bold: bool = False
    note: Optional[str] = None
    flagged: bool = False


@dataclass(frozen=True)
class TableLayout:
    """Column headers, body rows and an optional footer row."""

    columns: Tuple[str, ...]
    rows: Tuple[Tuple[Cell, ...], ...] = field(default_factory=tuple)
    footer: Optional[Tuple[Cell, ...]] = None


_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\s]+')
DRAFT_TOKEN = "Draft"


def document_filename(prefix: str, number: str) -> str:
    """PDF filename from a document number, "Draft" when the number is blank.

    Path separators and other characters unsafe in filenames become "-"
    (invoice numbers look like "5212/25").
    """
    token = _UNSAFE_FILENAME_CHARS.sub("-", (number or "").strip()).strip("-")
    return f"{prefix}_{token or DRAFT_TOKEN}.pdf"


def number_or_blank(number: str) -> str:
    """Document number for titles; blanks print as a fill-in line."""
    return (number or "").strip() or "____"
