"""Launch the interactive shell."""

import sys

import structlog
from rich.markup import escape

from tuimoney.commands.common import err_console, load_settings_or_exit
from tuimoney.domain import ConnectionFailed, MigrationFailed
from tuimoney.store import SqliteRepository
from tuimoney.tui import App, run

logger = structlog.get_logger(__name__)


def shell_command(db: str | None = None, config: str | None = None) -> None:
    """Open the database, migrate it and run the shell until the user quits."""
    settings = load_settings_or_exit(db, config)

    try:
        repo = SqliteRepository.open(settings.db_path)
    except MigrationFailed as e:
        err_console.print(
            f"[red]Database migration {escape(e.version)} failed:[/red] {escape(str(e.cause))}",
            style="bold",
        )
        err_console.print("[dim]Nothing was started; the failed migration was rolled back.[/dim]")
        sys.exit(1)
    except ConnectionFailed as e:
        err_console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    logger.info("shell_started", db_path=str(settings.db_path))
    with repo:
        run(App(repo, users=settings.users, currency_symbol=settings.currency_symbol))
    logger.info("shell_stopped")
