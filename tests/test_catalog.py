"""Unit tests for the reference catalogs and their JSON store."""

import json
from unittest.mock import patch

import pytest

from seadocs.catalog.catalog import FALLBACK_PRODUCT_ID, Catalog, DuplicateNameError
from seadocs.catalog.seeds import DEFAULT_CLIENTS, DEFAULT_PRODUCTS, DEFAULT_TRANSPORTS
from seadocs.catalog.store import CLIENTS_KEY, PRODUCTS_KEY, TRANSPORTS_KEY, CatalogStore
from seadocs.models.product import Product
from seadocs.models.symbol import Symbol


@pytest.fixture
def store(tmp_path):
    return CatalogStore(tmp_path)


class TestCatalogStore:
    """JSON file per catalog key."""

    def test_missing_file_returns_none(self, store):
        assert store.load(PRODUCTS_KEY) is None

    def test_save_and_load(self, store, tmp_path):
        path = store.save(TRANSPORTS_KEY, ["A", "B"])
        assert path == tmp_path / "catalog" / "transports.json"
        assert store.load(TRANSPORTS_KEY) == ["A", "B"]

    def test_corrupt_file_returns_none(self, store, caplog):
        path = store.path_for(CLIENTS_KEY)
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")
        with caplog.at_level("WARNING"):
            assert store.load(CLIENTS_KEY) is None
        assert "Failed to load catalog" in caplog.text

    def test_non_list_returns_none(self, store):
        path = store.path_for(CLIENTS_KEY)
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"name": "x"}), encoding="utf-8")
        assert store.load(CLIENTS_KEY) is None

    def test_unknown_key(self, store):
        with pytest.raises(ValueError):
            store.path_for("ships")

    def test_no_temp_files_left(self, store, tmp_path):
        store.save(PRODUCTS_KEY, [])
        assert [p.name for p in (tmp_path / "catalog").iterdir()] == ["products.json"]


class TestCatalogLoad:
    """Seed fallback when loading."""

    def test_empty_store_gives_seeds(self, store):
        catalog = Catalog.load(store)
        assert [p.id for p in catalog.products] == [p.id for p in DEFAULT_PRODUCTS]
        assert [c.name for c in catalog.clients] == [c.name for c in DEFAULT_CLIENTS]
        assert catalog.transports == DEFAULT_TRANSPORTS

    def test_each_key_falls_back_independently(self, store):
        store.save(TRANSPORTS_KEY, ["MY CARRIER"])
        catalog = Catalog.load(store)
        assert catalog.transports == ["MY CARRIER"]
        assert len(catalog.products) == len(DEFAULT_PRODUCTS)

    def test_malformed_records_use_seeds(self, store):
        store.save(PRODUCTS_KEY, [{"id": "", "name": ""}])
        catalog = Catalog.load(store)
        assert len(catalog.products) == len(DEFAULT_PRODUCTS)

    def test_seeds_are_not_shared(self):
        first = Catalog()
        first.add_product("NEW FISH")
        assert len(Catalog().products) == len(DEFAULT_PRODUCTS)

    def test_seed_contents(self):
        catalog = Catalog()
        assert len(catalog.products) == 43
        assert catalog.find_product("30").default_symbol is Symbol.PIECE
        assert catalog.find_product("23").name == "MERLUZA"


class TestLookups:
    """Finding and matching products and clients."""

    def test_find_product_unknown(self):
        assert Catalog().find_product("nope") is None

    def test_find_client_by_name(self):
        client = Catalog().find_client("PESCNORT MAR SL")
        assert client is not None
        assert "VALENCIA" in client.address

    def test_search_products_by_name_and_latin(self):
        catalog = Catalog()
        assert [p.name for p in catalog.search_products("merlu")] == ["MERLUZA"]
        assert [p.name for p in catalog.search_products("sparus")] == ["DORADA"]
        assert catalog.search_products("  ") == []

    def test_match_product_substring(self):
        assert Catalog().match_product("dorada") == "15"

    def test_match_product_falls_back_to_first(self):
        catalog = Catalog()
        assert catalog.match_product("unicorn fish") == catalog.products[0].id

    def test_match_product_empty_hint_gives_first(self):
        catalog = Catalog()
        assert catalog.match_product(None) == catalog.products[0].id

    def test_match_product_empty_catalog(self):
        assert Catalog(products=[]).match_product("dorada") == FALLBACK_PRODUCT_ID


class TestMutations:
    """Adding entries keeps names unique and persists."""

    def test_add_product_uppercases_and_prepends(self):
        catalog = Catalog()
        product = catalog.add_product("  lubina ", latin_name="dicentrarchus labrax", symbol="P")
        assert catalog.products[0] is product
        assert product.name == "LUBINA"
        assert product.latin_name == "DICENTRARCHUS LABRAX"
        assert product.default_symbol is Symbol.PIECE

    def test_add_product_blank_latin_is_none(self):
        assert Catalog().add_product("LUBINA").latin_name is None

    def test_duplicate_product_rejected(self):
        catalog = Catalog()
        with pytest.raises(DuplicateNameError):
            catalog.add_product("merluza")

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError):
            Catalog().add_client("   ")

    def test_add_client_appends(self):
        catalog = Catalog()
        client = catalog.add_client("nuevo mar sl", "HUELVA ESPAGNE")
        assert catalog.clients[-1] is client
        assert client.name == "NUEVO MAR SL"
        assert client.address == "HUELVA ESPAGNE"

    def test_duplicate_client_rejected_case_insensitive(self):
        catalog = Catalog()
        with pytest.raises(DuplicateNameError):
            catalog.add_client("petaca chico sl")

    def test_add_transport(self):
        catalog = Catalog()
        assert catalog.add_transport("trans nord") == "TRANS NORD"
        with pytest.raises(DuplicateNameError):
            catalog.add_transport("Trans Nord")

    def test_mutations_persist(self, store):
        catalog = Catalog.load(store)
        catalog.add_client("NUEVO MAR SL", "HUELVA ESPAGNE")
        catalog.add_product("LUBINA")

        reloaded = Catalog.load(store)
        assert reloaded.find_client("NUEVO MAR SL") is not None
        assert reloaded.products[0].name == "LUBINA"

    def test_persist_failure_is_logged_not_raised(self, store, caplog):
        catalog = Catalog.load(store)
        with patch.object(CatalogStore, "save", side_effect=OSError("disk full")):
            with caplog.at_level("ERROR"):
                catalog.add_transport("TRANS SUD")
        assert "TRANS SUD" in catalog.transports
        assert "Failed to save catalog transports" in caplog.text

    def test_product_model_validation(self):
        with pytest.raises(ValueError):
            Product(id="x", name=" ")
