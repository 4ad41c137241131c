"""Deterministic aggregation of validation outcomes."""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from .LinkStatus import LinkStatus
from .ValidationOutcome import ValidationOutcome


@dataclass(frozen=True)
class Report:
    """Outcomes of one run ordered by document, line and column."""

    outcomes: tuple[ValidationOutcome, ...]
    summary: dict[str, int] = field(compare=False)

    @classmethod
    def from_outcomes(cls, outcomes: Iterable[ValidationOutcome]) -> "Report":
        ordered = tuple(sorted(outcomes, key=lambda outcome: outcome.link.sort_key()))
        counts = Counter(outcome.status for outcome in ordered)
        summary = {status.value: counts.get(status, 0) for status in LinkStatus}
        summary["total"] = len(ordered)
        summary["cached"] = sum(1 for outcome in ordered if outcome.cached)
        return cls(outcomes=ordered, summary=summary)

    @property
    def failures(self) -> list[ValidationOutcome]:
        return [outcome for outcome in self.outcomes if outcome.status.is_failure]

    @property
    def passed(self) -> bool:
        """Excluded links never count toward failure."""
        return not self.failures
