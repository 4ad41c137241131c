"""A link found in a document."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class LinkReference:
    """A raw link target together with where it was found."""

    source_document: Path
    raw_target: str
    line_number: int
    column_number: int = 1

    @property
    def location(self) -> str:
        return f"{self.source_document}:{self.line_number}"

    def sort_key(self) -> tuple[str, int, int, str]:
        return (str(self.source_document), self.line_number, self.column_number, self.raw_target)
