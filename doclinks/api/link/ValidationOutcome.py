"""Result of validating a single link reference."""

from dataclasses import dataclass, field
from typing import Any

from .LinkReference import LinkReference
from .LinkStatus import LinkStatus


@dataclass(frozen=True)
class ValidationOutcome:
    """Status of one LinkReference for one run.

    ``reason`` carries the HTTP status, exception text or policy that led to
    the status. ``cached`` records where the status came from and does not
    take part in equality, so warm and cold runs compare equal.
    """

    link: LinkReference
    status: LinkStatus
    reason: str = ""
    cached: bool = field(default=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "document": str(self.link.source_document),
            "line_number": self.link.line_number,
            "column_number": self.link.column_number,
            "target": self.link.raw_target,
            "status": self.status.value,
            "reason": self.reason,
            "cached": self.cached,
        }
