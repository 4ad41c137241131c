"""Parse human duration strings such as ``1d`` or ``2h30m``."""

import math
import re
from datetime import timedelta

_UNIT_SECONDS = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
    "w": 7 * 24 * 60 * 60,
}

_PART_PATTERN = re.compile(r"(\d+(?:\.\d+)?)([smhdw])")
_FULL_PATTERN = re.compile(r"^(?:\d+(?:\.\d+)?[smhdw])+$")


def _from_seconds(seconds: float, value: object) -> timedelta:
    if not math.isfinite(seconds):
        raise ValueError(f"Duration must be finite: {value!r}")
    try:
        return timedelta(seconds=seconds)
    except OverflowError as e:
        raise ValueError(f"Duration too large: {value!r}") from e


def parse_duration(value: str | int | float | timedelta) -> timedelta:
    """Convert a duration expression to a ``timedelta``.

    Accepts a ``timedelta``, a number of seconds, a numeric string, or a
    unit string built from ``s``, ``m``, ``h``, ``d`` and ``w`` parts.

    Raises:
        ValueError: If the value cannot be parsed, is not finite, is too
            large for a ``timedelta`` or is negative
    """
    if isinstance(value, timedelta):
        result = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        result = _from_seconds(value, value)
    elif isinstance(value, str):
        text = value.strip().lower().replace(" ", "")
        if not text:
            raise ValueError("Duration must not be empty")
        try:
            seconds = float(text)
        except ValueError:
            if not _FULL_PATTERN.match(text):
                raise ValueError(f"Invalid duration: {value!r} (expected e.g. '30s', '12h', '1d')") from None
            seconds = sum(float(amount) * _UNIT_SECONDS[unit] for amount, unit in _PART_PATTERN.findall(text))
        result = _from_seconds(seconds, value)
    else:
        raise ValueError(f"Invalid duration type: {type(value).__name__}")

    if result < timedelta(0):
        raise ValueError(f"Duration must not be negative: {value!r}")
    return result
