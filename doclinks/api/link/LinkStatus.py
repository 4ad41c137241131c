from enum import Enum


class LinkStatus(str, Enum):
    """Outcome of validating one link."""

    OK = "ok"
    BROKEN = "broken"  # confirmed unreachable or missing
    EXCLUDED = "excluded"  # skipped by policy
    ERROR = "error"  # indeterminate: network failure, timeout, malformed target

    @property
    def is_failure(self) -> bool:
        return self in (LinkStatus.BROKEN, LinkStatus.ERROR)
