"""Configuration file management for tillcount."""

import os
import tomllib
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any

import tomli_w

from tillcount.domain.money import to_decimal
from tillcount.domain.tally import DEFAULT_FLOAT_AMOUNT
from tillcount.logging_setup import get_logger

logger = get_logger(__name__)

DEFAULT_CURRENCY_SYMBOL = "$"


class ConfigError(Exception):
    """Raised when the config file exists but cannot be read."""


@dataclass(frozen=True)
class Settings:
    """Immutable user preferences."""

    float_amount: Decimal = DEFAULT_FLOAT_AMOUNT
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "tillcount" / "config.toml"


def default_config() -> dict[str, Any]:
    return {
        "float_amount": str(DEFAULT_FLOAT_AMOUNT),
        "currency_symbol": DEFAULT_CURRENCY_SYMBOL,
    }


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(default_config(), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary, empty if the file doesn't exist.

    Raises:
        ConfigError: If the file exists but is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        logger.debug("No config file at %s, using defaults", config_path)
        return {}
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e


def parse_float_setting(value: Any) -> Decimal:
    """Parse the configured float, falling back to the default.

    Args:
        value: Raw value from the config file (string or integer).

    Returns:
        Non-negative float amount.
    """
    try:
        amount = to_decimal(value)
    except ValueError:
        logger.warning("Ignoring invalid float_amount %r in config", value)
        return DEFAULT_FLOAT_AMOUNT
    if amount < 0:
        logger.warning("Ignoring negative float_amount %s in config", amount)
        return DEFAULT_FLOAT_AMOUNT
    return amount


def load_settings(config_path: Path | None = None) -> Settings:
    """Load user preferences, applying defaults for missing keys.

    Raises:
        ConfigError: If the config file cannot be read.
    """
    config = load_config(config_path)

    float_amount = DEFAULT_FLOAT_AMOUNT
    if "float_amount" in config:
        float_amount = parse_float_setting(config["float_amount"])

    symbol = config.get("currency_symbol", DEFAULT_CURRENCY_SYMBOL)
    if not isinstance(symbol, str):
        logger.warning("Ignoring non-string currency_symbol %r in config", symbol)
        symbol = DEFAULT_CURRENCY_SYMBOL

    return Settings(float_amount=float_amount, currency_symbol=symbol)
