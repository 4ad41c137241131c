"""Decorator to handle StageResult for CLI display."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import TypeVar

import click

from ._run_single_execution import _run_single_execution

F = TypeVar("F", bound=Callable)


def _extract_display_format() -> str:
    """Get the display format from the active Typer/Click context chain.

    Defaults to yaml when no context sets it (e.g. a sub-app invoked alone).
    """
    current: click.Context | None = click.get_current_context(silent=True)
    while current is not None:
        obj = current.obj
        if isinstance(obj, dict) and obj.get("display_format") in ("json", "yaml"):
            return obj["display_format"]
        current = current.parent
    return "yaml"


def _handle_stage_result(func: F) -> F:
    """Wrap a command function to handle StageResult for CLI display.

    1. Announce (stderr)
    2. Progress (stderr)
    3. Result (stderr)
    4. Output (stdout as YAML or JSON)
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from doclinks.cli.display import get_display

        _run_single_execution(func, args, kwargs, get_display(), _extract_display_format())

    return wrapper  # type: ignore[return-value]
