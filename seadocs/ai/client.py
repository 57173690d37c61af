"""HTTP client for a self-hosted shipment parser service."""

import logging
from typing import List, Optional
from urllib.parse import urljoin

import requests
from pydantic import ValidationError

from .providers import AIProvider
from .schemas import ParsedItem, ParsedShipment

logger = logging.getLogger(__name__)


class AIClientError(Exception):
    """Base exception for AI client errors."""
    pass


class AIConnectionError(AIClientError):
    """Raised when connection to AI service fails."""
    pass


class AIAPIError(AIClientError):
    """Raised when AI API returns an error."""
    pass


class ParserClient(AIProvider):
    """Client for a parser service exposing ``POST <endpoint>/parse``.

    Request body: ``{"text": "..."}``. The response is either a JSON array of
    items or an object with an ``items`` array.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: Optional[str] = None,
        timeout: int = 30
    ):
        """Initialize parser client.

        Args:
            endpoint: Base URL for the service (e.g., "https://parser.example.com/v1/")
            api_key: Optional API key for authentication
            timeout: Request timeout in seconds
        """
        self.endpoint = endpoint.rstrip('/') + '/'
        self.api_key = api_key
        self.timeout = timeout
        self.session = requests.Session()

        headers = {
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        }
        if api_key:
            headers['Authorization'] = f'Bearer {api_key}'
        self.session.headers.update(headers)

    def parse_shipment(self, text: str, strict_json_instruction: bool = False) -> List[ParsedItem]:
        """Send shipment text to the parser service.

        Raises:
            AIConnectionError: If connection fails or times out
            AIAPIError: If the service returns an error status or an unreadable body
        """
        url = urljoin(self.endpoint, 'parse')

        try:
            response = self.session.post(url, json={'text': text}, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout:
            raise AIConnectionError(f"Request to {url} timed out after {self.timeout}s")
        except requests.exceptions.ConnectionError as e:
            raise AIConnectionError(f"Failed to connect to {url}: {e}")
        except requests.exceptions.HTTPError as e:
            error_msg = f"API error: {e.response.status_code}"
            try:
                error_data = e.response.json()
                error_msg += f" - {error_data.get('error', 'Unknown error')}"
            except ValueError:
                error_msg += f" - {e.response.text[:200]}"
            raise AIAPIError(error_msg)

        try:
            data = response.json()
            if isinstance(data, list):
                data = {'items': data}
            return ParsedShipment.model_validate(data).items
        except (ValueError, ValidationError) as e:
            raise AIAPIError(f"Invalid response from {url}: {e}")

    def health_check(self) -> bool:
        """Check if the parser service is available.

        Returns:
            True if service is available, False otherwise
        """
        url = urljoin(self.endpoint, 'health')
        try:
            response = self.session.get(url, timeout=5)
            return response.status_code == 200
        except requests.exceptions.RequestException as e:
            logger.debug(f"Health check failed for {url}: {e}")
            return False
