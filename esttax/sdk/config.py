"""Configuration management for Est Tax.

Settings live in settings.json - machine-specific preferences:
- tax_rules_file: path to a tax rules YAML that replaces the built-in table
- tax_year: built-in tax year to use when no rules file is set
- default_output_format: "text" or "json"

Config directory resolution:
1. ESTTAX_CONFIG_PATH environment variable (if set)
2. $XDG_CONFIG_HOME/est-tax/ (default ~/.config/est-tax/)

Tax rules resolution (resolve_tax_rules):
1. Explicit rules file (e.g. --rules)
2. settings.json "tax_rules_file" (skipped when a year is given explicitly)
3. Built-in table for the explicit year, settings "tax_year", or the default year
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

from .taxes.rules import get_tax_rules, load_tax_rules
from .taxes.schemas import TaxYearRules

logger = logging.getLogger(__name__)

APP_NAME = "est-tax"
SETTINGS_FILENAME = "settings.json"
OUTPUT_FORMATS = ("text", "json")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. ESTTAX_CONFIG_PATH environment variable
    2. ~/.config/est-tax/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("ESTTAX_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json, or default if unset."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def clear_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was set."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_default_output_format() -> str:
    """Configured output format, falling back to text."""
    value = get_setting("default_output_format", "text")
    if value not in OUTPUT_FORMATS:
        logger.warning(f"Ignoring invalid default_output_format '{value}' in {get_settings_path()}")
        return "text"
    return value


def resolve_tax_rules(
    rules_file: Optional[Union[str, Path]] = None,
    year: Optional[Union[int, str]] = None,
) -> TaxYearRules:
    """Resolve which tax rules table to use.

    Args:
        rules_file: Explicit rules YAML (takes precedence over everything)
        year: Built-in tax year, used when no rules file applies

    Raises:
        FileNotFoundError: If the rules file does not exist
        UnsupportedTaxYearError: If the year has no built-in table
        pydantic.ValidationError: If the rules file is malformed
    """
    if rules_file:
        return load_tax_rules(rules_file)

    settings = load_settings()
    configured_file = settings.get("tax_rules_file")
    if configured_file and year is None:
        logger.debug(f"using tax_rules_file from settings: {configured_file}")
        return load_tax_rules(configured_file)

    if year is None:
        year = settings.get("tax_year")
    return get_tax_rules(year)
