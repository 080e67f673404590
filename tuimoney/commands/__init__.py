"""Command bodies behind the typer entry point."""
