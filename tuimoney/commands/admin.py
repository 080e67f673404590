"""Admin commands for init and listing entries."""

import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tuimoney.commands.common import as_path, err_console, load_settings_or_exit
from tuimoney.config import create_default_config, get_config_path
from tuimoney.dates import format_date, parse_optional_date
from tuimoney.domain import EntryFilter, EntryKind, Month, StorageError
from tuimoney.domain.money import format_amount
from tuimoney.store import SqliteRepository, applied_migrations, connect, database_exists, init_database

console = Console()


def run_migration(db_path: Path) -> None:
    """Run database migrations on existing database and print the migration log."""
    console.print(f"[cyan]Running migrations on {db_path}...[/cyan]")
    applied = init_database(db_path)
    if applied:
        console.print(f"[green]✓[/green] Applied {len(applied)} migration(s): {', '.join(applied)}")
    else:
        console.print("[dim]Database schema is up to date[/dim]")

    conn = connect(db_path)
    try:
        records = applied_migrations(conn)
    finally:
        conn.close()

    table = Table(title="Migration log")
    table.add_column("Version", style="cyan")
    table.add_column("Applied at", style="dim")
    for record in records:
        table.add_row(record.version, record.applied_at)
    console.print(table)


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize new database and config."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Database initialized")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(
    force: bool = False,
    migrate: bool = False,
    db: str | None = None,
    config: str | None = None,
) -> None:
    """Initialize tui-money database and configuration."""
    # --force rewrites the config with defaults, so the old file is not read.
    settings = load_settings_or_exit(db, config, read_file=not force)
    db_path = settings.db_path
    config_path = as_path(config) or get_config_path()

    db_exists = database_exists(db_path)
    config_exists = config_path.exists()

    try:
        # Migration path: update existing database only
        if migrate:
            if not db_exists:
                err_console.print("[red]No database found to migrate[/red]", style="bold")
                err_console.print(f"[dim]Expected location: {db_path}[/dim]")
                sys.exit(1)
            run_migration(db_path)
            return

        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            err_console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                err_console.print(f"  Database already exists: {db_path}")
            if config_exists:
                err_console.print(f"  Config already exists: {config_path}")
            err_console.print("\n[yellow]Use 'tui-money init --force' to overwrite the config[/yellow]")
            err_console.print("[yellow]Or 'tui-money init --migrate' to update database schema only[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path)

    except StorageError as e:
        err_console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        err_console.print(f"[red]Filesystem error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def build_filter(
    category: str | None = None,
    since: str | None = None,
    until: str | None = None,
    month: str | None = None,
) -> EntryFilter:
    """Turn list options into a filter.

    Raises:
        InvalidDate: If a date or the month is malformed.
        ValueError: If --month is combined with --since or --until.
    """
    category = category.strip() if category and category.strip() else None
    if month:
        if since or until:
            raise ValueError("--month cannot be combined with --since/--until")
        return EntryFilter.for_month(Month(month), category)
    return EntryFilter(start=parse_optional_date(since), end=parse_optional_date(until), category=category)


def list_command(
    category: str | None = None,
    since: str | None = None,
    until: str | None = None,
    month: str | None = None,
    db: str | None = None,
    config: str | None = None,
) -> None:
    """List entries."""
    settings = load_settings_or_exit(db, config)

    try:
        entry_filter = build_filter(category, since, until, month)
    except ValueError as e:
        # ValidationError is a ValueError too
        err_console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    if not database_exists(settings.db_path):
        err_console.print("[red]Database not found. Run 'tui-money init' first.[/red]", style="bold")
        sys.exit(1)

    try:
        with SqliteRepository.open(settings.db_path) as repo:
            entries = repo.list(entry_filter)
    except StorageError as e:
        err_console.print(f"[red]Database error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    if not entries:
        console.print("[yellow]No entries found[/yellow]")
        return

    symbol = settings.currency_symbol
    table = Table(title=f"Entries (showing {len(entries)})")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Kind")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("Note", style="white")

    net = 0
    for entry in entries:
        amount = format_amount(entry.kind, entry.amount_cents, symbol)
        if entry.kind is EntryKind.EXPENSE:
            amount_display = f"[red]{amount}[/red]"
            net -= entry.amount_cents
        else:
            amount_display = f"[green]{amount}[/green]"
            net += entry.amount_cents
        note = escape(entry.note) if entry.note else "[dim]-[/dim]"
        table.add_row(
            str(entry.id),
            format_date(entry.occurred_on),
            entry.kind.label,
            escape(entry.category),
            amount_display,
            note,
        )

    console.print(table)

    net_kind = EntryKind.INCOME if net >= 0 else EntryKind.EXPENSE
    color = "green" if net >= 0 else "red"
    console.print(f"Net: [{color}]{format_amount(net_kind, abs(net), symbol)}[/{color}]")
