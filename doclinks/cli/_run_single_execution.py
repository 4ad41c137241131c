"""Run command once and display result using 4-stage pattern."""

import sys
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

from doclinks.api.validate_output import validate_output

F = TypeVar("F", bound=Callable)


def _run_single_execution(
    func: F,
    args: tuple,
    kwargs: dict,
    display: Any,
    display_format: str,
) -> None:
    """Run command once, display the result and exit with its status.

    Commands must handle all exceptions internally and format errors
    via their domain-specific output schema.
    """
    result = func(*args, **kwargs)

    # Stage 1: Announce
    display.status(result.announce)

    # Stage 2: Progress - generator yielding (progress_fraction, message)
    for progress_percent, message in result.progress_callback(result):
        timestamp = datetime.now().strftime("%H:%M:%S")
        display.info(f"[dim]{timestamp}[/dim] Progress: {message} ({progress_percent:.1%})")

    if not result.result:
        raise ValueError("progress_callback must set result.result to a non-empty string")
    if not result.output:
        raise ValueError("progress_callback must set result.output to a non-empty dict")

    # Validation failure is a programming error - fail loudly
    result.output = validate_output(func, result.output)

    # Stage 3: Result
    for warning in result.output.get("warnings", []):
        display.warning(warning)
    if result.success:
        display.success(result.result)
    else:
        display.error(result.result)

    # Stage 4: Output - YAML or JSON based on --display flag
    display.json_output(result.output, format=display_format)

    sys.exit(0 if result.success else 1)
