"""CLI entry point for tillcount."""

from typing import Optional

import typer

from tillcount.commands.admin import init_command
from tillcount.commands.count import count_command, denominations_command
from tillcount.logging_setup import configure_logging

app = typer.Typer(
    name="tillcount",
    help="Count your cash drawer and see what goes to the bank",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Count your cash drawer and see what goes to the bank."""
    configure_logging("DEBUG" if verbose else None)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize tillcount configuration."""
    init_command(force)


@app.command()
def count(
    float_input: str = typer.Option(None, "--float", help="Float kept in the drawer (default from config)"),
    qty: list[str] = typer.Option(None, "--qty", "-q", help="Count for a denomination as ID=COUNT (repeatable)"),
    interactive: Optional[bool] = typer.Option(
        None,
        "--interactive/--no-interactive",
        help="Prompt for each denomination, then allow edits (default: only without --qty)",
    ),
) -> None:
    """Count your drawer and show the grand total and bank deposit."""
    count_command(float_input, qty, interactive)


@app.command()
def denominations() -> None:
    """List the denominations you can count."""
    denominations_command()


if __name__ == "__main__":
    app()
