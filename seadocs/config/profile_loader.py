"""Company profile loader: letterheads, bank data and document constants."""

import yaml
from decimal import Decimal
from pathlib import Path
from typing import Dict, Any, List
from dataclasses import dataclass, field

from ..engine.amount_words import GENERAL, MODES
from ..engine.aggregation import DEFAULT_PLASTIC_FACTOR
from ..engine.classification import DEFAULT_DESTINATION_CITY, DEFAULT_MOLLUSK_NAMES


@dataclass
class CompanyProfile:
    """Static reference data printed on the documents.

    Sections mirror the YAML file:
        company: exporter letterhead, origin city, contact line
        bank: exporter payment block lines
        carrier: transport company letterhead and bank block
        documents: mollusk names, default city, plastic factor, defaults
        shipping_note: fixed bilingual template text
    """
    name: str
    description: str = ""
    company: Dict[str, Any] = field(default_factory=dict)
    bank: Dict[str, Any] = field(default_factory=dict)
    carrier: Dict[str, Any] = field(default_factory=dict)
    documents: Dict[str, Any] = field(default_factory=dict)
    shipping_note: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate profile values that drive computations."""
        mode = self.amount_words_mode
        if mode not in MODES:
            raise ValueError(f"amount_words must be one of {MODES}, got {mode!r}")
        if self.plastic_factor < 0:
            raise ValueError(f"plastic_factor must be >= 0, got {self.plastic_factor}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CompanyProfile':
        """Create CompanyProfile from dictionary."""
        return cls(
            name=data.get('name', 'default'),
            description=data.get('description', ''),
            company=data.get('company', {}) or {},
            bank=data.get('bank', {}) or {},
            carrier=data.get('carrier', {}) or {},
            documents=data.get('documents', {}) or {},
            shipping_note=data.get('shipping_note', {}) or {},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'name': self.name,
            'description': self.description,
            'company': self.company,
            'bank': self.bank,
            'carrier': self.carrier,
            'documents': self.documents,
            'shipping_note': self.shipping_note,
        }

    @property
    def mollusk_names(self) -> List[str]:
        return [str(n).upper() for n in self.documents.get('mollusk_names', DEFAULT_MOLLUSK_NAMES)]

    @property
    def default_destination_city(self) -> str:
        return str(self.documents.get('default_destination_city', DEFAULT_DESTINATION_CITY))

    @property
    def plastic_factor(self) -> Decimal:
        return Decimal(str(self.documents.get('plastic_factor', DEFAULT_PLASTIC_FACTOR)))

    @property
    def default_exchange_rate(self) -> Decimal:
        return Decimal(str(self.documents.get('default_exchange_rate', '10.47')))

    @property
    def default_incoterm(self) -> str:
        return str(self.documents.get('default_incoterm', 'FOB'))

    @property
    def amount_words_mode(self) -> str:
        return str(self.documents.get('amount_words', GENERAL))

    @property
    def currency_word(self) -> str:
        return str(self.documents.get('currency_word', 'EUROS'))

    @property
    def home_currency(self) -> str:
        return str(self.documents.get('home_currency', 'DHS'))

    @property
    def origin_city(self) -> str:
        return str(self.company.get('origin_city', 'TANGER'))


def get_profiles_dir() -> Path:
    """Get directory containing profile YAML files (shipped inside the package)."""
    return Path(__file__).resolve().parent / "profiles"


def load_profile(profile_name: str = "default") -> CompanyProfile:
    """Load a company profile.

    Args:
        profile_name: Name of profile to load (without .yaml extension)

    Returns:
        CompanyProfile object

    Raises:
        FileNotFoundError: If profile file doesn't exist
        ValueError: If profile file is invalid
    """
    profile_path = get_profiles_dir() / f"{profile_name}.yaml"

    if not profile_path.exists():
        raise FileNotFoundError(f"Profile not found: {profile_name} (expected at {profile_path})")

    try:
        with open(profile_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in profile {profile_name}: {e}")

    if not data:
        raise ValueError(f"Profile file is empty: {profile_path}")

    return CompanyProfile.from_dict(data)


def list_available_profiles() -> list[str]:
    """List all available profile names (without .yaml extension)."""
    profiles_dir = get_profiles_dir()

    if not profiles_dir.exists():
        return ["default"]

    profiles = [profile_file.stem for profile_file in profiles_dir.glob("*.yaml")]
    return sorted(profiles) if profiles else ["default"]

