"""Output formatting for the command line."""

import json
from typing import Any

from rich.console import Console
from rich.markup import escape


class OutputFormatter:
    """Prints user-facing messages.

    Results go to stdout; warnings, errors and progress go to stderr so
    that ``--json`` output stays machine readable.
    """

    def __init__(self, json_output: bool = False, quiet: bool = False):
        self.json_output = json_output
        self.quiet = quiet
        self.console = Console(highlight=False)
        self.err_console = Console(stderr=True, highlight=False, soft_wrap=True)

    def info(self, message: str) -> None:
        """Print an informational message."""
        if not self.quiet and not self.json_output:
            self.console.print(message, markup=False)

    def success(self, message: str) -> None:
        """Print a success message."""
        if not self.quiet and not self.json_output:
            self.console.print(f"[green]{escape(message)}[/green]")

    def warning(self, message: str) -> None:
        """Print a warning to stderr."""
        if not self.quiet:
            self.err_console.print(f"[yellow]{escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        """Print an error to stderr. Errors are shown even in quiet mode."""
        self.err_console.print(f"[red]{escape(message)}[/red]")

    def output_json(self, data: Any) -> None:
        """Print data as JSON on stdout."""
        print(json.dumps(data, indent=2, default=str))
