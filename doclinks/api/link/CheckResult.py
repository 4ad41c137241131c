from typing import NamedTuple

from .LinkStatus import LinkStatus


class CheckResult(NamedTuple):
    """Status of a normalized link plus a human-readable reason."""

    status: LinkStatus
    reason: str = ""
