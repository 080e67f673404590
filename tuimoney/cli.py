"""CLI entry point for tui-money."""

import typer

from tuimoney.commands.admin import init_command, list_command
from tuimoney.commands.shell import shell_command

app = typer.Typer(
    name="tui-money",
    help="TUI Money - a terminal income and expense tracker",
    add_completion=False,
)

DB_HELP = "Database file (default: ./tui-money.db or the config's database.path)"
CONFIG_HELP = "Config file (default: $XDG_CONFIG_HOME/tui-money/config.toml)"


def _pick(ctx: typer.Context, key: str, value: str | None) -> str | None:
    # Options given after the subcommand win over the ones given before it.
    if value is not None:
        return value
    return (ctx.obj or {}).get(key)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    db: str = typer.Option(None, "--db", help=DB_HELP),
    config: str = typer.Option(None, "--config", help=CONFIG_HELP),
) -> None:
    """TUI Money - run without a command to open the interactive shell."""
    ctx.obj = {"db": db, "config": config}
    if ctx.invoked_subcommand is None:
        shell_command(db, config)


@app.command(name="init")
def init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
    migrate: bool = typer.Option(False, "--migrate", help="Only migrate an existing database and show the log"),
    db: str = typer.Option(None, "--db", help=DB_HELP),
    config: str = typer.Option(None, "--config", help=CONFIG_HELP),
) -> None:
    """Initialize tui-money database and configuration."""
    init_command(force, migrate, _pick(ctx, "db", db), _pick(ctx, "config", config))


@app.command(name="list")
def list_entries(
    ctx: typer.Context,
    category: str = typer.Option(None, "--category", "-c", help="Only this category (exact match)"),
    since: str = typer.Option(None, "--since", help="First date to include (YYYY-MM-DD)"),
    until: str = typer.Option(None, "--until", help="Last date to include (YYYY-MM-DD)"),
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    db: str = typer.Option(None, "--db", help=DB_HELP),
    config: str = typer.Option(None, "--config", help=CONFIG_HELP),
) -> None:
    """List your entries, most recent first."""
    list_command(category, since, until, month, _pick(ctx, "db", db), _pick(ctx, "config", config))


if __name__ == "__main__":
    app()
