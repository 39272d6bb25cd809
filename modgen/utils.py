"""Shared console helpers for modgen.

All user-facing output (section headers, summaries, errors) goes through a
single Rich ``Console`` so that tests can swap in a recording console.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_section_header(title: str, out: Console | None = None) -> None:
    """Print a full-width rule with *title* centred in it."""
    out = out or console
    out.print()
    out.print(Rule(f"[bold bright_cyan] {title} [/bold bright_cyan]", style="bright_cyan"))
    out.print()


def print_summary_table(
    data: dict[str, str], title: str = "Summary", out: Console | None = None
) -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
        out: Console to print on (defaults to the shared console).
    """
    out = out or console
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    out.print(table)
    out.print()


def print_success(message: str, out: Console | None = None) -> None:
    """Print a green success message."""
    (out or console).print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str, out: Console | None = None) -> None:
    """Print a red error message."""
    (out or console).print(f"[bold red]{escape(message)}[/bold red]", highlight=False)


def print_warning(message: str, out: Console | None = None) -> None:
    """Print a yellow warning message."""
    (out or console).print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_file_list(
    paths: list[Path], root: Path, label: str, out: Console | None = None
) -> None:
    """Print *paths* relative to *root*, one per line, prefixed by *label*."""
    out = out or console
    for path in paths:
        try:
            shown = path.relative_to(root)
        except ValueError:
            shown = path
        out.print(f"  [dim]{label}[/dim] {escape(str(shown))}", highlight=False)
