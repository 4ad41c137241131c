"""Display utilities for the CLI."""

from .CLIDisplay import CLIDisplay
from .Display import Display


def get_display() -> Display:
    """Get the display implementation used by CLI commands."""
    return CLIDisplay()


__all__ = ["CLIDisplay", "Display", "get_display"]
