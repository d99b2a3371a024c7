"""CLI for the scicalc calculator.

Usage:
    python -m scicalc eval "2+3*4"                 # Evaluate one expression
    python -m scicalc eval "sqrt(2)" --no-history  # ...without recording it
    python -m scicalc repl                         # Interactive prompt
    python -m scicalc history                      # Show stored results
    python -m scicalc clear-history                # Forget stored results
    python -m scicalc convert 100 F C              # Unit conversion
    python -m scicalc units                        # List known units
    python -m scicalc -v eval "1/0"                # Debug logging
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from scicalc.config import history_limit, history_path
from scicalc.converter import (
    ConversionError,
    UnitCategory,
    convert,
    format_conversion,
    unit_label,
    units_in,
)
from scicalc.history import History, render_history
from scicalc.session import CONTINUATION_KEYS, ERROR_MARKER, CalculatorSession

app = typer.Typer(
    name="scicalc",
    help="Scientific calculator with history and unit conversion",
    no_args_is_help=True,
)
console = Console(stderr=True)
out = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Scientific calculator with history and unit conversion."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _load_history() -> History:
    return History.load(history_path(), limit=history_limit())


@app.command("eval", context_settings={"ignore_unknown_options": True})
def cmd_eval(
    expression: str = typer.Argument(help="Expression, e.g. '2+3*4' or 'sin(pi/2)'"),
    no_history: bool = typer.Option(False, "--no-history", help="Do not record the result"),
) -> None:
    """Evaluate a single expression."""
    history = _load_history()
    session = CalculatorSession(history)
    session.press(expression)
    result = session.evaluate()

    if result is None or result == ERROR_MARKER:
        console.print(f"[red]{ERROR_MARKER}[/red]")
        raise typer.Exit(1)

    out.print(result, highlight=False)
    if not no_history:
        history.save(history_path())


@app.command("repl")
def cmd_repl() -> None:
    """Interactive prompt.  Type :history, :clear or :quit.

    A line starting with an operator right after a result continues from
    that result ("+2" after "8" evaluates "8+2"); any other line starts fresh.
    """
    history = _load_history()
    session = CalculatorSession(history)
    path = history_path()
    console.print("[bold]scicalc[/bold] (:history, :clear, :quit)")

    while True:
        try:
            line = console.input("[green]calc>[/green] ").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if not line:
            continue
        if line in (":quit", ":q"):
            break
        if line == ":history":
            render_history(history, console)
            continue
        if line == ":clear":
            history.clear()
            history.save(path)
            console.print("History cleared")
            continue

        if session.result_final and line[0] in CONTINUATION_KEYS:
            session.press(line[0])
            session.press(line[1:])
        else:
            session.clear()
            session.press(line)
        result = session.evaluate()
        if result == ERROR_MARKER:
            console.print(f"[red]{ERROR_MARKER}[/red]")
        else:
            out.print(result, highlight=False)
            history.save(path)


@app.command("history")
def cmd_history() -> None:
    """List stored results, newest first."""
    render_history(_load_history(), console)


@app.command("clear-history")
def cmd_clear_history() -> None:
    """Forget all stored results."""
    history = _load_history()
    history.clear()
    history.save(history_path())
    console.print("History cleared")


@app.command("convert")
def cmd_convert(
    amount: float = typer.Argument(help="Value to convert"),
    from_unit: str = typer.Argument(help="Source unit (e.g. 'm', 'lb', 'C')"),
    to_unit: str = typer.Argument(help="Target unit (e.g. 'ft', 'kg', 'F')"),
) -> None:
    """Convert a value between two units of the same kind."""
    try:
        value = convert(amount, from_unit, to_unit)
    except ConversionError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    out.print(f"{format_conversion(value)} {to_unit}", highlight=False)


@app.command("units")
def cmd_units() -> None:
    """Show the units available for conversion."""
    table = Table(title="Units", show_header=True, header_style="bold")
    table.add_column("Category", style="green", min_width=12)
    table.add_column("Symbol", justify="right")
    table.add_column("Name", min_width=12)

    for category in UnitCategory:
        for unit in units_in(category):
            table.add_row(category.value, unit, unit_label(unit))

    console.print()
    console.print(table)
    console.print()


if __name__ == "__main__":
    app()
