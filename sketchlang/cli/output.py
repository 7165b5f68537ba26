"""
Output formatting for CLI operations.

Program output, per-frame drawing summaries and diagnostics are written
through a shared rich console so commands render consistently.
"""

import json
from typing import Any, Iterable, List, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..observability import Diagnostic
from ..runtime import DrawCommand, format_value

console = Console(highlight=False)
error_console = Console(stderr=True, highlight=False)


def print_success(message: str) -> None:
    """
    Print success message with checkmark prefix.

    Examples:
        >>> print_success("Wrote frame.svg")  # doctest: +SKIP
        ✓ Wrote frame.svg
    """
    console.print(f"✓ {message}", style="green", markup=False)


def print_error(message: str) -> None:
    error_console.print(f"✗ {message}", style="red", markup=False)


def print_warning(message: str) -> None:
    error_console.print(f"⚠ {message}", style="yellow", markup=False)


def print_info(message: str) -> None:
    console.print(f"ℹ {message}", markup=False)


def print_program_output(values: Sequence[Any]) -> None:
    """Write one ``print(...)`` call, arguments joined by spaces."""
    console.print(" ".join(format_value(value) for value in values), markup=False)


def print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def print_table(
    headers: Sequence[str],
    rows: Iterable[Sequence[str]],
    *,
    title: Optional[str] = None,
    target: Optional[Console] = None,
) -> None:
    """Render ``rows`` as a rich table."""
    table = Table(title=title)
    for header in headers:
        table.add_column(header)
    for row in rows:
        table.add_row(*[Text(str(cell)) for cell in row])
    (target or console).print(table)


def print_frame(frame: int, commands: Sequence[DrawCommand]) -> None:
    """Summarise the drawing commands produced by one frame."""
    if not commands:
        console.print(f"frame {frame}: no shapes", style="dim")
        return
    rows: List[List[str]] = [
        [command.shape, ", ".join(format_value(arg) for arg in command.args), command.color]
        for command in commands
    ]
    print_table(("shape", "args", "color"), rows, title=f"frame {frame}")


def print_diagnostics(diagnostics: Sequence[Diagnostic], *, title: str = "Diagnostics") -> None:
    """Write collected diagnostics to stderr as a table."""
    if not diagnostics:
        return
    rows = [
        [
            diagnostic.code,
            "" if diagnostic.line is None else str(diagnostic.line),
            "" if diagnostic.frame is None else str(diagnostic.frame),
            diagnostic.message if not diagnostic.hint else f"{diagnostic.message} ({diagnostic.hint})",
        ]
        for diagnostic in diagnostics
    ]
    print_table(("code", "line", "frame", "message"), rows, title=title, target=error_console)


def diagnostic_to_dict(diagnostic: Diagnostic) -> dict:
    return {
        "code": diagnostic.code,
        "message": diagnostic.message,
        "line": diagnostic.line,
        "frame": diagnostic.frame,
        "hint": diagnostic.hint,
    }
