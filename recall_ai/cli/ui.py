# recall_ai/cli/ui.py
"""
Shared UI helpers for CLI commands.

Usage:
    from recall_ai.cli.ui import ui, console

    ui.success("Done!")
"""

from __future__ import annotations

from typing import Iterable, Sequence

from rich.console import Console
from rich.table import Table

console = Console()


class UI:
    """Consistent Rich output for every command."""

    def print(self, msg: str, style: str = "") -> None:
        """Print with optional Rich styling."""
        if style:
            console.print(f"[{style}]{msg}[/{style}]")
        else:
            console.print(msg)

    def success(self, msg: str) -> None:
        console.print(f"[green]✓[/green] {msg}")

    def error(self, msg: str) -> None:
        console.print(f"[red]✗[/red] {msg}")

    def warning(self, msg: str, detail: str = "") -> None:
        detail_str = f" [dim]({detail})[/dim]" if detail else ""
        console.print(f"[yellow]⚠[/yellow] {msg}{detail_str}")

    def info(self, msg: str) -> None:
        """Print an info/dim message."""
        console.print(f"[dim]{msg}[/dim]")

    def stream_text(self, text: str) -> None:
        """Print streamed response text verbatim, without a trailing newline."""
        console.print(text, end="", markup=False, highlight=False, soft_wrap=True)

    def table(self, title: str, columns: Sequence[str], rows: Iterable[Sequence[str]]) -> None:
        table = Table(title=title)
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*row)
        console.print(table)


ui = UI()

__all__ = ["UI", "ui", "console"]
