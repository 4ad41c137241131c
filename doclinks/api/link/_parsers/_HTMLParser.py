"""HTML link parser."""

import re
from collections.abc import Iterator

from ._BaseParser import BaseParser, LinkRef
from .ParseError import ParseError

# Simple regex for finding href and src
# Note: This is not a full HTML parser but sufficient for link checking
HREF_PATTERN = re.compile(r'<(?:a|link|area)\s+(?:[^>]*?\s+)?href=["\']([^"\']*)["\']', re.IGNORECASE)
SRC_PATTERN = re.compile(r'<(?:img|script|iframe|source|video|audio)\s+(?:[^>]*?\s+)?src=["\']([^"\']*)["\']', re.IGNORECASE)
COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)


class HTMLParser(BaseParser):
    """Parser for HTML files. Links inside comments are ignored."""

    def parse(self, text: str) -> Iterator[LinkRef]:
        opened = text.find("<!--")
        if opened != -1 and text.find("-->", opened) == -1:
            line_num = text.count("\n", 0, opened) + 1
            raise ParseError(f"Unterminated comment opened on line {line_num}")

        # Blank comments but keep newlines so line numbers stay accurate
        text = COMMENT_PATTERN.sub(lambda m: re.sub(r"[^\n]", " ", m.group(0)), text)

        for line_num, line in enumerate(text.splitlines(), start=1):
            for match in HREF_PATTERN.finditer(line):
                url = match.group(1).strip()
                if not url or url.startswith("#"):
                    continue

                yield LinkRef(
                    line_number=line_num,
                    column_number=match.start() + 1,
                    raw_target=url,
                    link_type="url",
                )

            for match in SRC_PATTERN.finditer(line):
                url = match.group(1).strip()
                if not url:
                    continue

                yield LinkRef(
                    line_number=line_num,
                    column_number=match.start() + 1,
                    raw_target=url,
                    link_type="image",
                    is_embed=True,
                )
