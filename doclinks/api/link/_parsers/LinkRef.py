"""Link reference found by a parser, before it is tied to a document."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LinkRef:
    """A reference to a link found in a text."""

    line_number: int
    column_number: int
    raw_target: str
    link_type: str  # "url", "image", "reference", "autolink"
    alias: str = ""
    is_embed: bool = False
