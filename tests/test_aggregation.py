"""Unit tests for line item aggregation."""

from decimal import Decimal

import pytest

from seadocs.catalog.catalog import Catalog
from seadocs.engine.aggregation import (
    UNKNOWN_PRODUCT_NAME,
    collation_key,
    compute_totals,
    compute_view,
    plastic_weight,
    sort_items,
    unified_symbol,
)
from seadocs.models.client import Client
from seadocs.models.line_item import LineItem
from seadocs.models.product import Product
from seadocs.models.symbol import Symbol


@pytest.fixture
def catalog():
    """Small catalog without persistence."""
    return Catalog(
        products=[
            Product(id="p1", name="MERLUZA", latin_name="MERLUCCIUS MERLUCCIUS"),
            Product(id="p2", name="DORADA", latin_name="SPARUS AURATA"),
            Product(id="p3", name="ÉGLEFIN"),
            Product(id="p4", name="PEZ.LIMON", default_symbol=Symbol.PIECE),
        ],
        clients=[Client(id="c1", name="CLIENT", address="")],
        transports=["CARRIER"],
    )


def _item(product_id, quantity="10", symbol="C", gross="100", net="90", price="4"):
    return LineItem(
        product_id=product_id,
        quantity=Decimal(quantity),
        symbol=symbol,
        gross_weight=Decimal(gross),
        net_weight=Decimal(net),
        unit_price=Decimal(price),
    )


class TestSorting:
    """Display order by product name."""

    def test_sorted_by_product_name(self, catalog):
        items = [_item("p1"), _item("p2"), _item("p4")]
        names = [catalog.find_product(i.product_id).name for i in sort_items(items, catalog)]
        assert names == ["DORADA", "MERLUZA", "PEZ.LIMON"]

    def test_accents_are_ignored(self, catalog):
        items = [_item("p1"), _item("p3"), _item("p2")]
        names = [catalog.find_product(i.product_id).name for i in sort_items(items, catalog)]
        assert names == ["DORADA", "ÉGLEFIN", "MERLUZA"]

    def test_unknown_products_sort_first(self, catalog):
        items = [_item("p2"), _item("missing")]
        ordered = sort_items(items, catalog)
        assert ordered[0].product_id == "missing"

    def test_sort_is_idempotent(self, catalog):
        items = [_item("p1"), _item("p2"), _item("p1", quantity="3")]
        once = sort_items(items, catalog)
        assert sort_items(once, catalog) == once

    def test_collation_key_folds_case(self):
        assert collation_key("dorada")[0] == collation_key("DORADA")[0]


class TestTotals:
    """Totals and per-line amounts."""

    def test_totals(self, catalog):
        items = [
            _item("p1", quantity="10", gross="120", net="100", price="4.5"),
            _item("p2", quantity="5", gross="60", net="50", price="8"),
        ]
        totals = compute_totals(items)
        assert totals.gross == Decimal("180")
        assert totals.net == Decimal("150")
        assert totals.quantity == Decimal("15")
        assert totals.monetary == Decimal("850.0")

    def test_empty(self):
        totals = compute_totals([])
        assert totals.gross == totals.net == totals.quantity == totals.monetary == Decimal("0")

    def test_amount_is_net_times_price(self):
        item = _item("p1", gross="30", net="25", price="3.2")
        assert item.amount == Decimal("80.0")


class TestUnifiedSymbol:
    """Document-level packaging symbol."""

    def test_no_items(self):
        assert unified_symbol([]) is None

    def test_all_pieces(self):
        assert unified_symbol([_item("p4", symbol="P"), _item("p4", symbol="P")]) is Symbol.PIECE

    def test_any_crate_wins(self):
        assert unified_symbol([_item("p4", symbol="P"), _item("p1", symbol="C")]) is Symbol.CRATE


class TestPlasticWeight:
    """Non-reusable plastic estimate."""

    def test_default_factor(self):
        assert plastic_weight(Decimal("1000")) == Decimal("6.00")

    def test_rounding_half_up(self):
        assert plastic_weight(Decimal("1075")) == Decimal("6.45")
        assert plastic_weight(Decimal("1")) == Decimal("0.01")

    def test_custom_factor(self):
        assert plastic_weight(Decimal("500"), Decimal("0.01")) == Decimal("5.00")


class TestComputeView:
    """Full aggregation against the catalog."""

    def test_view_lines_resolve_names(self, catalog):
        view = compute_view([_item("p1"), _item("missing")], catalog)
        assert [line.product_name for line in view.lines] == [UNKNOWN_PRODUCT_NAME, "MERLUZA"]
        assert view.lines[1].latin_name == "MERLUCCIUS MERLUCCIUS"
        assert view.lines[0].latin_name is None

    def test_unknown_product_still_counts_in_totals(self, catalog):
        view = compute_view([_item("missing", gross="10", net="8", price="2")], catalog)
        assert view.totals.monetary == Decimal("16")

    def test_weight_error_per_line(self, catalog):
        items = [_item("p1", gross="100", net="90"), _item("p2", gross="10", net="12")]
        view = compute_view(items, catalog)
        assert view.has_weight_error
        flags = {line.item.product_id: line.weight_error for line in view.lines}
        assert flags == {"p1": False, "p2": True}

    def test_weight_error_logged(self, catalog, caplog):
        with caplog.at_level("WARNING"):
            compute_view([_item("p1", gross="10", net="20")], catalog)
        assert "Net weight exceeds gross weight" in caplog.text

    def test_no_weight_error(self, catalog):
        view = compute_view([_item("p1", gross="100", net="100")], catalog)
        assert not view.has_weight_error

    def test_view_reflects_current_items(self, catalog):
        items = [_item("p1", gross="100")]
        first = compute_view(items, catalog)
        items.append(_item("p2", gross="50"))
        second = compute_view(items, catalog)
        assert first.totals.gross == Decimal("100")
        assert second.totals.gross == Decimal("150")

    def test_plastic_weight_from_gross(self, catalog):
        view = compute_view([_item("p1", gross="2000", net="1800")], catalog)
        assert view.plastic_weight == Decimal("12.00")
