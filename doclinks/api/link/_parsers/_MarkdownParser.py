"""Markdown link parser."""

import re
from collections.abc import Iterator

from ._BaseParser import BaseParser, LinkRef
from .ParseError import ParseError

# [alias](target "optional title") and ![alt](target)
MARKDOWN_URL_PATTERN = re.compile(r"(!)?\[([^\]]*)\]\(\s*(?:<([^>]+)>|([^)\s]+))(?:\s+[\"'(][^)]*)?\s*\)")
# <https://example.com>
AUTOLINK_PATTERN = re.compile(r"<((?:https?|ftp|mailto):[^>\s]+)>", re.IGNORECASE)
# [id]: target "optional title"
REFERENCE_PATTERN = re.compile(r"^\s{0,3}\[([^\]^][^\]]*)\]:\s*<?([^\s>]+)>?")
# Bare URLs in running text
BARE_URL_PATTERN = re.compile(r"https?://[^\s<>()\[\]\"'`]+", re.IGNORECASE)
FENCE_PATTERN = re.compile(r"^\s{0,3}(`{3,}|~{3,})")
CODE_SPAN_PATTERN = re.compile(r"(`+)(.+?)\1")

_TRAILING_PUNCTUATION = ",.;:!?*_"


def _blank_code_spans(line: str) -> str:
    """Replace inline code spans with spaces, keeping columns stable."""
    return CODE_SPAN_PATTERN.sub(lambda m: " " * len(m.group(0)), line)


class MarkdownParser(BaseParser):
    """Parser for Markdown files.

    Links inside fenced code blocks and inline code spans are ignored.
    """

    def parse(self, text: str) -> Iterator[LinkRef]:
        fence: str | None = None
        fence_line = 0

        for line_num, raw_line in enumerate(text.splitlines(), start=1):
            fence_match = FENCE_PATTERN.match(raw_line)
            if fence is not None:
                if fence_match and fence_match.group(1)[0] == fence[0] and len(fence_match.group(1)) >= len(fence):
                    fence = None
                continue
            if fence_match:
                fence = fence_match.group(1)
                fence_line = line_num
                continue

            line = _blank_code_spans(raw_line)
            covered: list[tuple[int, int]] = []

            ref_match = REFERENCE_PATTERN.match(line)
            if ref_match:
                covered.append(ref_match.span())
                yield LinkRef(
                    line_number=line_num,
                    column_number=ref_match.start(2) + 1,
                    raw_target=ref_match.group(2).strip(),
                    link_type="reference",
                    alias=ref_match.group(1).strip(),
                )

            for match in MARKDOWN_URL_PATTERN.finditer(line):
                covered.append(match.span())
                yield LinkRef(
                    line_number=line_num,
                    column_number=match.start() + 1,
                    raw_target=(match.group(3) or match.group(4)).strip(),
                    link_type="image" if match.group(1) else "url",
                    alias=match.group(2).strip(),
                    is_embed=bool(match.group(1)),
                )

            for match in AUTOLINK_PATTERN.finditer(line):
                covered.append(match.span())
                yield LinkRef(
                    line_number=line_num,
                    column_number=match.start() + 1,
                    raw_target=match.group(1),
                    link_type="autolink",
                )

            for match in BARE_URL_PATTERN.finditer(line):
                if any(start <= match.start() < end for start, end in covered):
                    continue
                url = match.group(0).rstrip(_TRAILING_PUNCTUATION)
                yield LinkRef(
                    line_number=line_num,
                    column_number=match.start() + 1,
                    raw_target=url,
                    link_type="url",
                )

        if fence is not None:
            raise ParseError(f"Unterminated code fence opened on line {fence_line}")
