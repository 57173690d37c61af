"""Reference catalogs: products, clients and transport carriers."""

from __future__ import annotations

import copy
import logging
from typing import Iterable, List, Optional

from ..models.client import Client
from ..models.line_item import new_item_id
from ..models.product import Product
from ..models.symbol import Symbol
from .seeds import DEFAULT_CLIENTS, DEFAULT_PRODUCTS, DEFAULT_TRANSPORTS
from .store import CLIENTS_KEY, PRODUCTS_KEY, TRANSPORTS_KEY, CatalogStore

logger = logging.getLogger(__name__)

FALLBACK_PRODUCT_ID = "default"


class DuplicateNameError(ValueError):
    """Raised when a catalog entry would reuse an existing name."""
    pass


class Catalog:
    """In-memory catalogs, optionally persisted through a CatalogStore.

    Product lookups are by id; client lookups are by name, so client (and
    product, carrier) names are kept unique at insertion time.
    """

    def __init__(
        self,
        products: Optional[Iterable[Product]] = None,
        clients: Optional[Iterable[Client]] = None,
        transports: Optional[Iterable[str]] = None,
        store: Optional[CatalogStore] = None,
    ):
        self.products: List[Product] = list(products) if products is not None else copy.deepcopy(DEFAULT_PRODUCTS)
        self.clients: List[Client] = list(clients) if clients is not None else copy.deepcopy(DEFAULT_CLIENTS)
        self.transports: List[str] = list(transports) if transports is not None else list(DEFAULT_TRANSPORTS)
        self.store = store

    @classmethod
    def load(cls, store: CatalogStore) -> "Catalog":
        """Load all three catalogs, each falling back to its seed independently."""
        products = store.load(PRODUCTS_KEY)
        clients = store.load(CLIENTS_KEY)
        transports = store.load(TRANSPORTS_KEY)
        try:
            return cls(
                products=[Product.from_dict(p) for p in products] if products is not None else None,
                clients=[Client.from_dict(c) for c in clients] if clients is not None else None,
                transports=[str(t) for t in transports] if transports is not None else None,
                store=store,
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Stored catalog is malformed ({e}), using built-in lists")
            return cls(store=store)

    # -- persistence ---------------------------------------------------

    def _persist(self, key: str, records: list) -> None:
        if self.store is None:
            return
        try:
            self.store.save(key, records)
        except OSError as e:
            logger.error(f"Failed to save catalog {key}: {e}")

    # -- lookups -------------------------------------------------------

    def find_product(self, product_id: str) -> Optional[Product]:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def find_client(self, name: str) -> Optional[Client]:
        for client in self.clients:
            if client.name == name:
                return client
        return None

    def search_products(self, term: str) -> List[Product]:
        """Products whose name or latin name contains ``term`` (case-insensitive)."""
        needle = (term or "").strip().lower()
        if not needle:
            return []
        return [
            p for p in self.products
            if needle in p.name.lower() or (p.latin_name and needle in p.latin_name.lower())
        ]

    def match_product(self, hint: Optional[str]) -> str:
        """Resolve a free-text species hint to a product id.

        The first product whose name contains the hint (case-insensitive) wins;
        otherwise the first catalog product, or "default" for an empty catalog.
        """
        needle = (hint or "").lower()
        for product in self.products:
            if needle in product.name.lower():
                return product.id
        if self.products:
            return self.products[0].id
        return FALLBACK_PRODUCT_ID

    # -- mutations -----------------------------------------------------

    @staticmethod
    def _check_unique(name: str, existing: Iterable[str], kind: str) -> None:
        folded = name.casefold()
        if any(other.casefold() == folded for other in existing):
            raise DuplicateNameError(f"{kind} {name!r} already exists")

    def add_product(self, name: str, latin_name: str = "", symbol: Symbol = Symbol.CRATE) -> Product:
        """Create a product (uppercased) at the top of the list.

        Raises:
            ValueError: If the name is blank
            DuplicateNameError: If a product with the same name exists
        """
        name = (name or "").strip().upper()
        if not name:
            raise ValueError("Product name must not be empty")
        self._check_unique(name, (p.name for p in self.products), "Product")
        product = Product(
            id=new_item_id(),
            name=name,
            latin_name=(latin_name or "").strip().upper() or None,
            default_symbol=Symbol.parse(symbol),
        )
        self.products.insert(0, product)
        self._persist(PRODUCTS_KEY, [p.to_dict() for p in self.products])
        logger.info(f"Added product {product.name}")
        return product

    def add_client(self, name: str, address: str = "") -> Client:
        """Create a client (name uppercased).

        Raises:
            ValueError: If the name is blank
            DuplicateNameError: If a client with the same name exists
        """
        name = (name or "").strip().upper()
        if not name:
            raise ValueError("Client name must not be empty")
        self._check_unique(name, (c.name for c in self.clients), "Client")
        client = Client(id=new_item_id(), name=name, address=address or "")
        self.clients.append(client)
        self._persist(CLIENTS_KEY, [c.to_dict() for c in self.clients])
        logger.info(f"Added client {client.name}")
        return client

    def add_transport(self, name: str) -> str:
        """Register a carrier name (uppercased)."""
        name = (name or "").strip().upper()
        if not name:
            raise ValueError("Carrier name must not be empty")
        self._check_unique(name, self.transports, "Carrier")
        self.transports.append(name)
        self._persist(TRANSPORTS_KEY, list(self.transports))
        logger.info(f"Added carrier {name}")
        return name
