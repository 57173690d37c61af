"""AI provider abstraction for OpenAI and Claude shipment parsing.

Both providers turn a free-text shipment description (dictated or pasted from
a message) into ParsedItem rows. At most one retry is made on invalid JSON,
with a stricter instruction.
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import List, Optional

try:
    from openai import OpenAI
except ImportError:
    OpenAI = None

try:
    from anthropic import Anthropic
except ImportError:
    Anthropic = None

from pydantic import ValidationError

from .schemas import ParsedItem, ParsedShipment

logger = logging.getLogger(__name__)

AI_JSON_RETRY_COUNT = 1  # max retries on invalid JSON

SYSTEM_PROMPT = (
    "Tu es un expert en logistique de pêche. Tu extrais des lignes de facture "
    "d'export de poisson frais à partir d'un texte libre."
)

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


def build_prompt(text: str, strict_json_instruction: bool = False) -> str:
    """Build the extraction prompt for one shipment text."""
    prompt = (
        "Analyse le texte pour extraire, pour chaque espèce: le nom de l'espèce, "
        "la quantité, le symbole d'emballage (C pour caisses, P pour pièces), "
        "le poids brut (KG), le poids net (KG) et le prix unitaire (EUR par KG net).\n\n"
        f'Texte d\'entrée: "{text}"\n\n'
        'Return JSON: {"items": [{"fish_name_suggestion": "...", "quantity": number, '
        '"symbol": "C" | "P", "gross_weight": number, "net_weight": number, '
        '"unit_price": number}]}\n'
        "Use 0 for any number that is not stated.\n"
    )
    if strict_json_instruction:
        prompt += "\nReturn only valid JSON matching this schema; no additional text or markdown.\n"
    return prompt


def parse_items_json(content: str) -> List[ParsedItem]:
    """Parse a JSON answer (object with "items", or a bare array) into ParsedItems.

    Markdown code fences around the JSON are tolerated.

    Raises:
        ValueError: If no valid JSON payload is found
    """
    stripped = _FENCE.sub("", (content or "").strip())
    starts = [i for i in (stripped.find("{"), stripped.find("[")) if i >= 0]
    if not starts:
        raise ValueError("No JSON found in AI response")
    start = min(starts)
    end = stripped.rfind("]" if stripped[start] == "[" else "}")
    if end <= start:
        raise ValueError("Unterminated JSON in AI response")

    try:
        data = json.loads(stripped[start:end + 1])
        if isinstance(data, list):
            data = {"items": data}
        return ParsedShipment.model_validate(data).items
    except (json.JSONDecodeError, ValidationError) as e:
        raise ValueError(f"Failed to parse AI response: {e}") from e


class AIProvider(ABC):
    """Abstract base class for shipment parser backends."""

    @abstractmethod
    def parse_shipment(self, text: str, strict_json_instruction: bool = False) -> List[ParsedItem]:
        """Extract line suggestions from free text.

        Args:
            text: Shipment description
            strict_json_instruction: If True, ask for JSON only (used on retry)

        Returns:
            Suggested rows, possibly empty

        Raises:
            Exception: If the call fails or the answer cannot be parsed
        """
        pass


class OpenAIProvider(AIProvider):
    """OpenAI provider using structured outputs."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini"):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Model name (default: gpt-4o-mini)
        """
        if OpenAI is None:
            raise ImportError(
                "openai library is required. Install with: pip install openai"
            )

        self.client = OpenAI(api_key=api_key)
        self.model = model

    def parse_shipment(self, text: str, strict_json_instruction: bool = False) -> List[ParsedItem]:
        """Parse shipment text using OpenAI structured outputs."""
        try:
            response = self.client.chat.completions.parse(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(text, strict_json_instruction)},
                ],
                response_format=ParsedShipment,
            )
            parsed = response.choices[0].message.parsed
            if parsed is not None:
                return parsed.items
            return parse_items_json(response.choices[0].message.content or "")
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise


class ClaudeProvider(AIProvider):
    """Claude provider using the Anthropic messages API (JSON in text)."""

    def __init__(self, api_key: str, model: str = "claude-3-5-sonnet-latest"):
        """Initialize Claude provider.

        Args:
            api_key: Anthropic API key
            model: Model name (default: claude-3-5-sonnet-latest)
        """
        if Anthropic is None:
            raise ImportError(
                "anthropic library is required. Install with: pip install anthropic"
            )

        self.client = Anthropic(api_key=api_key)
        self.model = model

    def parse_shipment(self, text: str, strict_json_instruction: bool = False) -> List[ParsedItem]:
        """Parse shipment text using Claude."""
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=2048,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": build_prompt(text, strict_json_instruction)}],
            )
            return parse_items_json(response.content[0].text)
        except Exception as e:
            logger.error(f"Claude API error: {e}")
            raise


def create_provider(provider: str, api_key: str, model: Optional[str] = None) -> AIProvider:
    """Create a provider by name ("openai" or "claude").

    Raises:
        ValueError: Unknown provider name
        ImportError: Provider library not installed
    """
    name = (provider or "").lower()
    if name == "openai":
        return OpenAIProvider(api_key=api_key, model=model or "gpt-4o-mini")
    if name == "claude":
        return ClaudeProvider(api_key=api_key, model=model or "claude-3-5-sonnet-latest")
    raise ValueError(f"Unknown AI provider: {provider}")
