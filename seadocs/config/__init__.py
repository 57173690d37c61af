"""Central configuration for seadocs."""

import os
import sys
import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

AI_PROVIDERS = ("openai", "claude")


def get_app_name() -> str:
    """Get application name."""
    return "DAM PECHE Documents"


def get_app_version() -> str:
    """Get application version from pyproject.toml."""
    try:
        import tomli
        pyproject_path = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            pyproject = tomli.load(f)
            return pyproject.get("project", {}).get("version", "1.0.0")
    except Exception:
        # Installed without the source tree
        return "1.0.0"


def get_data_dir() -> Path:
    """Get the directory holding catalogs and saved settings.

    SEADOCS_DATA_DIR wins; otherwise ~/.seadocs (created if needed).
    """
    env_dir = os.getenv("SEADOCS_DATA_DIR")
    base = Path(env_dir) if env_dir else Path.home() / ".seadocs"
    base.mkdir(parents=True, exist_ok=True)
    return base


def get_default_output_dir() -> Path:
    """Get default output directory for exported documents.

    - Running from source (dev): project root / "out".
    - Running from a frozen build: Documents/DAM PECHE on Windows,
      ~/.seadocs/output elsewhere.

    Returns:
        Path object to default output directory (created if needed)
    """
    if getattr(sys, "frozen", False):
        if os.name == "nt":
            userprofile = os.getenv("USERPROFILE", "")
            base = Path(userprofile) / "Documents" / "DAM PECHE" if userprofile else Path.home() / "Documents" / "DAM PECHE"
            output_dir = base
        else:
            output_dir = get_data_dir() / "output"
    else:
        output_dir = Path(__file__).resolve().parent.parent.parent / "out"
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


DEFAULT_AI_MODELS = {"openai": "gpt-4o-mini", "claude": "claude-3-5-sonnet-latest"}


def _ai_setting(env_name: str, file_key: str) -> Optional[str]:
    """Environment variable first, then the saved AI config file."""
    value = os.getenv(env_name)
    if value:
        return value
    return load_ai_config().get(file_key) or None


def get_ai_enabled() -> bool:
    """Check if the AI shipment parser is enabled.

    AI_ENABLED must be 'true' (any case); without the variable the saved
    config's ``enabled`` flag decides. Off by default.
    """
    env_value = os.getenv('AI_ENABLED')
    if env_value is not None:
        return env_value.lower() == 'true'
    return bool(load_ai_config().get('enabled', False))


def get_ai_endpoint() -> Optional[str]:
    """URL of a self-hosted parser service (AI_ENDPOINT), or None."""
    return _ai_setting('AI_ENDPOINT', 'endpoint')


def get_ai_provider() -> str:
    """AI provider name, one of AI_PROVIDERS; "openai" when unset or unknown."""
    provider = (_ai_setting('AI_PROVIDER', 'provider') or 'openai').lower()
    if provider not in AI_PROVIDERS:
        logger.warning(f"Invalid AI provider: {provider}, using 'openai'")
        return 'openai'
    return provider


def get_ai_model() -> str:
    """AI model name; the provider's default model when unset."""
    return _ai_setting('AI_MODEL', 'model') or DEFAULT_AI_MODELS[get_ai_provider()]


def get_ai_key() -> Optional[str]:
    """API key for the hosted provider or the parser service, or None."""
    return _ai_setting('AI_KEY', 'api_key')


def get_ai_config_path() -> Path:
    """Get path to AI configuration file (<data_dir>/configs/ai_config.json)."""
    return get_data_dir() / "configs" / "ai_config.json"


def load_ai_config() -> dict:
    """Load AI configuration from file.

    Returns:
        Dict with AI configuration (enabled, provider, model, api_key, endpoint)
    """
    config_path = get_ai_config_path()
    if not config_path.exists():
        return {}
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load AI config: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring AI config {config_path}: not a JSON object")
        return {}
    return data


def save_ai_config(config: dict) -> None:
    """Save AI configuration to file."""
    config_path = get_ai_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=2, ensure_ascii=False)
    except OSError as e:
        logger.error(f"Failed to save AI config: {e}")
        raise


def set_ai_config(
    enabled: bool,
    provider: str,
    model: str,
    api_key: Optional[str] = None,
    endpoint: Optional[str] = None
) -> None:
    """Set AI configuration and save to file.

    Args:
        enabled: Whether the AI parser is enabled
        provider: "openai" or "claude"
        model: Model name
        api_key: Optional API key (if None, keeps existing key)
        endpoint: Optional parser service URL (if None, keeps existing;
            an empty string removes it)
    """
    if provider not in AI_PROVIDERS:
        raise ValueError(f"Invalid AI provider: {provider} (must be one of {AI_PROVIDERS})")

    config = load_ai_config()
    config['enabled'] = enabled
    config['provider'] = provider
    config['model'] = model
    if api_key is not None:
        config['api_key'] = api_key
    if endpoint is not None:
        config['endpoint'] = endpoint

    save_ai_config(config)


def clear_ai_config() -> None:
    """Remove all saved AI configuration."""
    save_ai_config({})
