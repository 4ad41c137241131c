"""CLI display implementation using Rich library."""

import json
import sys
from datetime import datetime
from typing import Any

import yaml  # type: ignore
from rich.console import Console
from rich.syntax import Syntax

from .Display import Display


class CLIDisplay(Display):
    """CLI display using Rich: messages on stderr, data on stdout."""

    def __init__(self):
        self.console = Console(file=sys.stdout)
        self.stderr_console = Console(file=sys.stderr)

    def status(self, message: str, **kwargs) -> None:  # noqa: ARG002
        timestamp = datetime.now().strftime("%H:%M:%S")
        self.stderr_console.print(f"[dim]{timestamp}[/dim] [blue]i[/blue] {message}")

    def success(self, message: str, **kwargs) -> None:  # noqa: ARG002
        timestamp = datetime.now().strftime("%H:%M:%S")
        self.stderr_console.print(f"[dim]{timestamp}[/dim] [green]✓[/green] {message}")

    def error(self, message: str, **kwargs) -> None:
        timestamp = datetime.now().strftime("%H:%M:%S")
        self.stderr_console.print(f"[dim]{timestamp}[/dim] [red]✗[/red] {message}")
        details = kwargs.get("details", "")
        if details:
            self.stderr_console.print(f"  [dim]{details}[/dim]")

    def warning(self, message: str, **kwargs) -> None:  # noqa: ARG002
        self.stderr_console.print(f"[yellow]⚠[/yellow] {message}")

    def info(self, message: str, **kwargs) -> None:  # noqa: ARG002
        self.stderr_console.print(message)

    def json_output(self, data: Any, **kwargs) -> None:
        output_format = kwargs.get("format", "yaml")
        indent = kwargs.get("indent", 2)

        if output_format == "yaml":
            text = yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
        else:
            text = json.dumps(data, indent=indent, ensure_ascii=False) + "\n"

        # Plain text when piped so the output stays machine-readable
        if sys.stdout.isatty():
            self.console.print(Syntax(text, output_format, theme="monokai", background_color="default"))
        else:
            sys.stdout.write(text)
