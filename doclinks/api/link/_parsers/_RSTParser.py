"""reStructuredText link parser."""

import re
from collections.abc import Iterator

from ._BaseParser import BaseParser, LinkRef

# `Link text <url>`_ and `Link text <url>`__
RST_LINK_PATTERN = re.compile(r"`([^`<]+)\s+<([^>]+)>`__?")
# .. _name: url
RST_TARGET_PATTERN = re.compile(r"^\.\.\s+_([^:]+):\s+(\S+)$")
# .. image:: url / .. figure:: url
RST_IMAGE_PATTERN = re.compile(r"^\.\.\s+(?:image|figure)::\s+(\S+)")


class RSTParser(BaseParser):
    """Parser for reStructuredText files."""

    def parse(self, text: str) -> Iterator[LinkRef]:
        for line_num, line in enumerate(text.splitlines(), start=1):
            for match in RST_LINK_PATTERN.finditer(line):
                url = match.group(2).strip()
                if url.endswith("_"):
                    continue  # Reference to a named target, not a URL

                yield LinkRef(
                    line_number=line_num,
                    column_number=match.start() + 1,
                    raw_target=url,
                    link_type="url",
                    alias=match.group(1).strip(),
                )

            stripped = line.strip()
            column = len(line) - len(line.lstrip()) + 1

            target_match = RST_TARGET_PATTERN.match(stripped)
            if target_match:
                yield LinkRef(
                    line_number=line_num,
                    column_number=column,
                    raw_target=target_match.group(2),
                    link_type="reference",
                    alias=target_match.group(1).strip(),
                )

            image_match = RST_IMAGE_PATTERN.match(stripped)
            if image_match:
                yield LinkRef(
                    line_number=line_num,
                    column_number=column,
                    raw_target=image_match.group(1),
                    link_type="image",
                    is_embed=True,
                )
