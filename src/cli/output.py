"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich library for spinners, tables and colored output. Supports
verbosity levels and the --no-color flag.
"""

from contextlib import contextmanager
from typing import Iterable, Iterator, Sequence

import typer
from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner
from rich.table import Table


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Namespace deleted")
        >>> with handler.spinner("Deleting namespace..."):
        ...     client.delete_namespace("team:old")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
            emoji=False,
        )
        self.error_console = Console(
            stderr=True,
            no_color=no_color,
            highlight=False,
            emoji=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        """Display error message in red on stderr."""
        self.error_console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow on stderr."""
        self.error_console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{message}[/dim]")

    def print(self, message: str) -> None:
        """Write message to stdout exactly as given.

        Bypasses Rich so wiki text is neither wrapped nor has markup or
        :emoji: codes replaced.
        """
        typer.echo(message)

    def print_lines(self, lines: Iterable[str]) -> None:
        """Display one plain line per item."""
        for line in lines:
            self.print(line)

    def print_table(self, columns: Sequence[str], rows: Iterable[Sequence[object]]) -> None:
        """Display rows as a table with the given column headers.

        Args:
            columns: Column headers
            rows: Row values; each value is rendered with str()
        """
        table = Table(*columns, show_header=True, header_style="bold")
        for row in rows:
            table.add_row(*(str(value) for value in row))
        self.console.print(table)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for single operations.

        Args:
            message: Message to display with spinner

        Yields:
            None
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.error_console, refresh_per_second=10, transient=True):
            yield
