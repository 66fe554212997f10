"""Configuration file management for ledgerline."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_CURRENCY_SYMBOL = "₹"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3001
DEFAULT_LOG_LEVEL = "WARNING"
DB_ENV_VAR = "LEDGERLINE_DB"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "ledgerline" / "config.toml"


def get_default_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "ledgerline" / "ledgerline.db"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings.

    pdf_font is an optional TTF for PDF reports. Without it the standard
    Helvetica font is used, which cannot draw symbols such as the rupee sign;
    those are written as text instead (e.g. "Rs.").
    """

    db_path: Path
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    pdf_font: Path | None = None
    log_level: str = DEFAULT_LOG_LEVEL
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config: dict[str, Any] = {
        "currency_symbol": DEFAULT_CURRENCY_SYMBOL,
        "log_level": DEFAULT_LOG_LEVEL,
        "server": {"host": DEFAULT_HOST, "port": DEFAULT_PORT},
    }

    save_config(default_config, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary, empty if the file does not exist.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return {}

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def get_settings(config_path: Path | None = None) -> Settings:
    """Resolve settings from the config file and environment.

    The LEDGERLINE_DB environment variable takes precedence over the
    ``database`` key.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings with defaults filled in.
    """
    config = load_config(config_path)
    server = config.get("server", {})

    db_value = os.environ.get(DB_ENV_VAR) or config.get("database")
    db_path = Path(db_value).expanduser() if db_value else get_default_db_path()

    pdf_font = config.get("pdf_font")

    return Settings(
        db_path=db_path,
        currency_symbol=config.get("currency_symbol", DEFAULT_CURRENCY_SYMBOL),
        pdf_font=Path(pdf_font).expanduser() if pdf_font else None,
        log_level=str(config.get("log_level", DEFAULT_LOG_LEVEL)),
        host=server.get("host", DEFAULT_HOST),
        port=int(server.get("port", DEFAULT_PORT)),
    )
