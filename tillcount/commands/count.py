"""Count command for tallying a cash drawer."""

import logging
import sys

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tillcount.config import ConfigError, Settings, load_settings
from tillcount.domain.models import Denomination
from tillcount.domain.money import format_currency
from tillcount.domain.tally import (
    TallyModel,
    UnknownDenominationError,
    float_input_text,
    next_denomination,
    quantity_input_text,
)
from tillcount.logging_setup import get_logger

console = Console()
logger = get_logger(__name__)

EDIT_PROMPT = "\nRow # to edit, f = float, r = reset, q = done"


def parse_quantity_option(entry: str) -> tuple[str, str] | None:
    """Split a --qty value of the form ID=COUNT.

    Args:
        entry: Raw option value (e.g., "20=2").

    Returns:
        Tuple of (denomination_id, raw_count), or None if there is no '='.
    """
    if "=" not in entry:
        return None
    denomination_id, raw = entry.split("=", 1)
    return denomination_id.strip(), raw


def build_tally_table(model: TallyModel, symbol: str) -> Table:
    """Build the per-denomination table, grouped into bills and coins.

    Args:
        model: Tally to render.
        symbol: Currency symbol for totals.

    Returns:
        Rich table ready to print.
    """
    table = Table(title="Cash Count")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Denomination", style="cyan")
    table.add_column("Qty", justify="right")
    table.add_column("Total", justify="right")

    row_numbers = {d.id: idx for idx, d in enumerate(model.denominations, 1)}

    for section, denominations in (("Bills", model.bills()), ("Coins", model.coins())):
        if not denominations:
            continue
        table.add_row("", f"[bold]{section}[/bold]", "", "")
        for denom in denominations:
            quantity = model.quantity(denom)
            qty_display = str(quantity) if quantity else "[dim]-[/dim]"
            table.add_row(
                str(row_numbers[denom.id]),
                denom.label,
                qty_display,
                format_currency(model.subtotal(denom), symbol),
            )
        table.add_section()

    return table


def render_summary(model: TallyModel, symbol: str) -> None:
    """Print float, grand total and the amount going to the bank."""
    console.print(f"[dim]Float:[/dim] {format_currency(model.float_amount, symbol)}")
    console.print(f"[bold]Grand Total:[/bold] {format_currency(model.grand_total(), symbol)}")
    console.print(f"[bold yellow]Goes to Bank:[/bold yellow] {format_currency(model.bank_amount(), symbol)}")


def render_tally(model: TallyModel, symbol: str) -> None:
    console.print(build_tally_table(model, symbol))
    render_summary(model, symbol)


def prompt_quantity(model: TallyModel, denom: Denomination) -> None:
    raw = typer.prompt(
        f"{denom.label}",
        default=quantity_input_text(model.quantity(denom)),
        show_default=False,
        type=str,
    )
    model.set_quantity(denom, raw)


def prompt_float(model: TallyModel) -> None:
    raw = typer.prompt(
        "Float",
        default=float_input_text(model.float_amount),
        show_default=False,
        type=str,
    )
    model.set_float_amount(raw)


def walk_denominations(model: TallyModel) -> None:
    """Prompt for every denomination in order, like pressing Next."""
    console.print("[dim]Enter counts (blank = 0)[/dim]")
    current = next_denomination(model.denominations, None)
    while current is not None:
        prompt_quantity(model, current)
        current = next_denomination(model.denominations, current)


def edit_loop(model: TallyModel, symbol: str) -> None:
    """Let the user adjust rows, the float, or reset until done.

    The table is re-rendered after each change.
    """
    changed = False

    def mark_changed() -> None:
        nonlocal changed
        changed = True

    unsubscribe = model.subscribe(mark_changed)
    try:
        while True:
            choice = typer.prompt(EDIT_PROMPT, type=str, default="q").strip().lower()

            if choice == "q":
                return
            elif choice == "f":
                prompt_float(model)
            elif choice == "r":
                model.reset_all()
                console.print("[green]✓[/green] All counts reset")
            elif choice.isascii() and choice.isdecimal() and 1 <= int(choice) <= len(model.denominations):
                prompt_quantity(model, model.denominations[int(choice) - 1])
            else:
                console.print(f"[red]Invalid choice: {escape(choice)}[/red]")
                continue

            if changed:
                changed = False
                render_tally(model, symbol)
    finally:
        unsubscribe()


def load_settings_or_exit() -> Settings:
    try:
        return load_settings()
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def count_command(
    float_input: str | None = None,
    quantities: list[str] | None = None,
    interactive: bool | None = None,
) -> None:
    """Count a cash drawer and show what goes to the bank.

    Prompts for every denomination unless counts were given with --qty,
    or interactive is set explicitly.
    """
    if interactive is None:
        interactive = not quantities

    settings = load_settings_or_exit()
    symbol = settings.currency_symbol

    model = TallyModel(float_amount=settings.float_amount)

    def log_update() -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Tally updated: total=%s bank=%s", model.grand_total(), model.bank_amount())

    model.subscribe(log_update)

    if float_input is not None:
        model.set_float_amount(float_input)

    for entry in quantities or []:
        parsed = parse_quantity_option(entry)
        if parsed is None:
            console.print(f"[red]Invalid --qty value '{escape(entry)}'. Use ID=COUNT (e.g., 20=3)[/red]", style="bold")
            sys.exit(1)
        denomination_id, raw = parsed
        try:
            model.set_quantity(denomination_id, raw)
        except UnknownDenominationError:
            known = ", ".join(d.id for d in model.denominations)
            console.print(f"[red]Unknown denomination '{escape(denomination_id)}'[/red]", style="bold")
            console.print(f"[dim]Known denominations: {known}[/dim]")
            sys.exit(1)

    if interactive:
        walk_denominations(model)
        render_tally(model, symbol)
        edit_loop(model, symbol)
    else:
        render_tally(model, symbol)


def denominations_command() -> None:
    """List the denominations that can be counted."""
    settings = load_settings_or_exit()
    model = TallyModel(float_amount=settings.float_amount)

    table = Table(title="Denominations")
    table.add_column("ID", style="cyan")
    table.add_column("Label")
    table.add_column("Value", justify="right")
    table.add_column("Kind", style="dim")

    for denom in model.denominations:
        table.add_row(denom.id, denom.label, format_currency(denom.value, settings.currency_symbol), denom.kind)

    console.print(table)
