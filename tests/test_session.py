"""Unit tests for the document editing helpers."""

from datetime import date
from decimal import Decimal

import pytest

from seadocs.catalog.catalog import Catalog
from seadocs.config.profile_loader import load_profile
from seadocs.models.invoice_document import DocumentState
from seadocs.models.line_item import LineItem
from seadocs.models.symbol import Symbol
from seadocs.session import add_product_line, merge_parsed_items, select_client, start_document


@pytest.fixture
def catalog():
    return Catalog()


@pytest.fixture
def document(catalog):
    return start_document(catalog, load_profile("default"), today=date(2025, 3, 14))


def test_start_document_defaults(document, catalog):
    assert document.state is DocumentState.DRAFT
    assert document.date == date(2025, 3, 14)
    assert document.client_name == catalog.clients[0].name
    assert document.client_address == catalog.clients[0].address
    assert document.transport_carrier_name == catalog.transports[0]
    assert document.exchange_rate == Decimal("10.47")
    assert document.incoterm == "FOB"
    assert document.items == ()


def test_start_document_empty_catalog():
    catalog = Catalog(products=[], clients=[], transports=[])
    document = start_document(catalog, load_profile("default"))
    assert document.client_name == ""
    assert document.transport_carrier_name == ""


def test_select_client_copies_address(document, catalog):
    select_client(document, catalog, "PETACA CHICO SL")
    assert document.client_address == "CONIL   (CADIZ)          ESPAGNE"


def test_address_override_not_written_back(document, catalog):
    select_client(document, catalog, "PETACA CHICO SL")
    document.client_address = "CHIPIONA ESPAGNE"
    assert catalog.find_client("PETACA CHICO SL").address == "CONIL   (CADIZ)          ESPAGNE"


def test_select_unknown_client(document, catalog):
    select_client(document, catalog, "WALK-IN BUYER")
    assert document.client_name == "WALK-IN BUYER"
    assert document.client_address == ""


def test_add_product_line_uses_default_symbol(document, catalog):
    document.validate()
    item = add_product_line(document, catalog.find_product("30"))
    assert item.symbol is Symbol.PIECE
    assert item.quantity == 0
    assert document.state is DocumentState.DRAFT


def test_merge_parsed_items(document):
    document.validate()
    added = merge_parsed_items(document, [LineItem(product_id="23"), LineItem(product_id="15")])
    assert len(added) == 2
    assert len(document.items) == 2
    assert document.state is DocumentState.DRAFT
