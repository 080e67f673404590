"""Setup shared by every command."""

import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from tuimoney.config import ConfigError, Settings, load_settings
from tuimoney.log import configure_logging

err_console = Console(stderr=True)


def as_path(value: str | None) -> Path | None:
    return Path(value).expanduser() if value else None


def load_settings_or_exit(db: str | None = None, config: str | None = None, read_file: bool = True) -> Settings:
    """Resolve settings and start logging; exits with code 1 on a bad config file."""
    try:
        settings = load_settings(config_path=as_path(config), db_path=as_path(db), read_file=read_file)
    except ConfigError as e:
        err_console.print(f"[red]Config error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    configure_logging(settings.log_file, settings.log_level)
    return settings
