"""Configuration file management for tui-money."""

import copy
import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from tuimoney.domain.errors import TuiMoneyError

DEFAULT_CONFIG: dict[str, Any] = {
    "database": {"path": "tui-money.db"},
    "display": {"currency_symbol": "$"},
    "logging": {"file": "tui-money.log", "level": "INFO"},
    "login": {"users": ["default"]},
}


class ConfigError(TuiMoneyError):
    """Config file exists but cannot be read or holds a value of the wrong type."""


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    db_path: Path
    currency_symbol: str = "$"
    log_file: Path | None = None
    log_level: str = "INFO"
    users: list[str] = field(default_factory=lambda: ["default"])


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
    return get_xdg_config_home() / "tui-money" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(copy.deepcopy(DEFAULT_CONFIG), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"{config_path}: {e}") from e


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


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    merged = dict(DEFAULT_CONFIG[name])
    value = config.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table")
    merged.update(value)
    return merged


def _string(section: dict[str, Any], key: str, name: str) -> str:
    value = section[key]
    if not isinstance(value, str):
        raise ConfigError(f"{name}.{key} must be a string, got {value!r}")
    return value


def _resolve(path_text: str, base: Path) -> Path:
    path = Path(path_text).expanduser()
    return path if path.is_absolute() else base / path


def load_settings(
    config_path: Path | None = None,
    db_path: Path | None = None,
    base_dir: Path | None = None,
    read_file: bool = True,
) -> Settings:
    """Resolve settings from the config file, if any, over the defaults.

    Args:
        config_path: Path to config file. If None, uses default location.
        db_path: Database path override (the --db option).
        base_dir: Directory relative paths resolve against. Defaults to the working directory.
        read_file: If False, ignore any existing config file and use the defaults.

    Returns:
        Resolved settings.

    Raises:
        ConfigError: If the config file cannot be read or a value has the wrong type.
    """
    base = base_dir or Path.cwd()
    config: dict[str, Any] = {}
    if read_file:
        try:
            config = load_config(config_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise ConfigError(f"{config_path or get_config_path()}: {e.strerror or e}") from e

    database = _section(config, "database")
    display = _section(config, "display")
    logging_section = _section(config, "logging")
    login = _section(config, "login")

    level = _string(logging_section, "level", "logging").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"logging.level must be a logging level name, got {level!r}")

    log_file_text = _string(logging_section, "file", "logging")

    users = login["users"]
    if not isinstance(users, list) or not all(isinstance(user, str) for user in users):
        raise ConfigError("login.users must be a list of strings")

    return Settings(
        db_path=db_path if db_path is not None else _resolve(_string(database, "path", "database"), base),
        currency_symbol=_string(display, "currency_symbol", "display"),
        log_file=_resolve(log_file_text, base) if log_file_text else None,
        log_level=level,
        users=list(users) or ["default"],
    )
