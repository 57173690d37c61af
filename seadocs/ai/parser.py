"""Free-text shipment parser: turns a message into invoice lines.

The parser never raises on backend failure: an unreachable service, a
malformed answer or a missing key all yield an empty suggestion list. Only one
request may be in flight at a time.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, List, Optional

from ..config import get_ai_enabled, get_ai_endpoint, get_ai_key, get_ai_model, get_ai_provider
from ..models.line_item import LineItem
from ..models.symbol import Symbol
from .client import ParserClient
from .providers import AI_JSON_RETRY_COUNT, AIProvider, create_provider
from .schemas import ParsedItem

if TYPE_CHECKING:
    from ..catalog.catalog import Catalog

logger = logging.getLogger(__name__)


class ParseInProgressError(RuntimeError):
    """Raised when a parse is requested while another one is still running."""
    pass


def create_backend_from_config() -> Optional[AIProvider]:
    """Create the parser backend from configuration.

    A configured endpoint (AI_ENDPOINT) takes precedence over the hosted
    providers. Returns None when nothing usable is configured.
    """
    if not get_ai_enabled():
        logger.debug("AI shipment parser disabled (AI_ENABLED is not true)")
        return None

    endpoint = get_ai_endpoint()
    if endpoint:
        return ParserClient(endpoint, api_key=get_ai_key())

    api_key = get_ai_key()
    if not api_key:
        logger.debug("AI API key not configured, shipment parser disabled")
        return None
    try:
        return create_provider(get_ai_provider(), api_key, get_ai_model())
    except ImportError as e:
        logger.warning(f"AI provider library not installed: {e}")
        return None


def to_line_items(parsed: Iterable[ParsedItem], catalog: Catalog) -> List[LineItem]:
    """Convert parser suggestions to line items.

    Species names are resolved with ``Catalog.match_product`` (first product
    containing the name, else the first product); missing numbers are zero.
    """
    items = []
    for suggestion in parsed:
        items.append(LineItem(
            product_id=catalog.match_product(suggestion.fish_name_suggestion),
            quantity=Decimal(str(suggestion.quantity)),
            symbol=Symbol.parse(suggestion.symbol),
            gross_weight=Decimal(str(suggestion.gross_weight)),
            net_weight=Decimal(str(suggestion.net_weight)),
            unit_price=Decimal(str(suggestion.unit_price)),
        ))
    return items


class ShipmentParser:
    """Single-flight wrapper around a parser backend."""

    def __init__(self, backend: Optional[AIProvider] = None):
        """Initialize parser.

        Args:
            backend: AIProvider (or ParserClient). If None, created from config.
        """
        self.backend = backend if backend is not None else create_backend_from_config()
        self._lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def is_parsing(self) -> bool:
        """True while a request is in flight."""
        return self._lock.locked()

    def _call_backend(self, text: str) -> List[ParsedItem]:
        if self.backend is None:
            logger.warning("Shipment parser is not configured; no suggestions")
            return []

        last_error: Optional[Exception] = None
        for attempt in range(AI_JSON_RETRY_COUNT + 1):
            strict = attempt > 0
            if strict:
                logger.warning("Parser response invalid, retrying once with strict JSON instruction")
            try:
                return list(self.backend.parse_shipment(text, strict_json_instruction=strict))
            except ValueError as e:
                last_error = e
            except Exception as e:
                last_error = e
                break
        logger.warning(f"Shipment parsing failed: {last_error}")
        return []

    def parse(self, text: str) -> List[ParsedItem]:
        """Parse shipment text synchronously.

        Returns:
            Suggested rows; [] for blank text or any backend failure

        Raises:
            ParseInProgressError: If another request is in flight
        """
        if not text or not text.strip():
            return []
        if not self._lock.acquire(blocking=False):
            raise ParseInProgressError("A shipment parse is already in progress")
        try:
            return self._call_backend(text)
        finally:
            self._lock.release()

    def submit(self, text: str, catalog: Catalog) -> "Future[List[LineItem]]":
        """Parse on the worker thread and convert the result to line items.

        Raises:
            ParseInProgressError: If another request is in flight
        """
        if not text or not text.strip():
            done: Future = Future()
            done.set_result([])
            return done
        if not self._lock.acquire(blocking=False):
            raise ParseInProgressError("A shipment parse is already in progress")

        def run() -> List[LineItem]:
            try:
                return to_line_items(self._call_backend(text), catalog)
            finally:
                self._lock.release()

        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="shipment-parser")
        try:
            return self._executor.submit(run)
        except RuntimeError:
            self._lock.release()
            raise

    def shutdown(self) -> None:
        """Stop the worker thread (waits for a running request)."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
