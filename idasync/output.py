"""Console output helpers for the idasync CLI and engine."""

import json
import sys
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape


class OutputFormatter:
    """Writes user-facing messages to the terminal.

    The engine only talks to this class, so a quiet formatter acts as a
    no-op sink and tests can pass a ``Mock(spec=OutputFormatter)``.
    """

    def __init__(
        self,
        json_output: bool = False,
        quiet: bool = False,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        """Initialize the formatter.

        Args:
            json_output: Print results as JSON instead of text
            quiet: Suppress everything except errors and results
            console: Console for regular output (defaults to stdout)
            err_console: Console for errors (defaults to stderr)
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = console or Console(highlight=False, soft_wrap=True)
        self.err_console = err_console or Console(
            stderr=True, highlight=False, soft_wrap=True
        )

    def print(self, message: str = "") -> None:
        if self.quiet or self.json_output:
            return
        self.console.print(message, markup=False)

    def info(self, message: str) -> None:
        if self.quiet or self.json_output:
            return
        self.console.print(message, markup=False)

    def success(self, message: str) -> None:
        if self.quiet or self.json_output:
            return
        self.console.print(f"[green]{escape(message)}[/green]")

    def warning(self, message: str) -> None:
        if self.quiet or self.json_output:
            return
        self.err_console.print(f"[yellow]{escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        """Print an error. Errors are never suppressed."""
        if self.json_output:
            self.output_json({"error": message}, stream=sys.stderr)
            return
        self.err_console.print(f"[red]Error: {escape(message)}[/red]")

    def output_json(self, data: Any, stream: Any = None) -> None:
        """Print data as a JSON document."""
        print(json.dumps(data, indent=2), file=stream or sys.stdout)
