"""Scan a document tree and yield the link references it contains."""

from collections.abc import Iterable, Iterator
from pathlib import Path

from doclinks.utils.expand_paths import expand_paths
from doclinks.utils.logger import get_logger
from doclinks.utils.normalize_path import normalize_path

from ._parsers import ParseError, get_parser
from .LinkReference import LinkReference

logger = get_logger("link.extract")


class LinkExtractor:
    """Restartable, lazy sequence of LinkReference under a root path.

    Every ``iter()`` rescans the tree. Documents that cannot be decoded or
    parsed contribute no references; a message is appended to
    ``diagnostics`` (reset at the start of each scan) and logged.

    Raises (on iteration):
        FileNotFoundError / PermissionError: If the root cannot be read
    """

    def __init__(
        self,
        root: Path,
        extensions: Iterable[str] | None = None,
        exclude_dirnames: Iterable[str] = (),
    ):
        self.root = normalize_path(root)
        self.extensions = {f".{ext.lower().lstrip('.')}" for ext in extensions} if extensions is not None else None
        self.exclude_dirnames = set(exclude_dirnames)
        self.diagnostics: list[str] = []
        self.documents = 0

    def __iter__(self) -> Iterator[LinkReference]:
        self.diagnostics = []
        self.documents = 0
        for document in expand_paths(self.root, self.extensions, self.exclude_dirnames):
            self.documents += 1
            yield from self.extract_document(document)

    def extract_document(self, document: Path) -> list[LinkReference]:
        """Return every candidate link in one document.

        Parsing is all-or-nothing: a malformed document yields an empty list.
        """
        try:
            text = document.read_text(encoding="utf-8")
            refs = list(get_parser(file_path=document).parse(text))
        except (OSError, UnicodeDecodeError, ParseError) as e:
            message = f"{document}: {e}"
            self.diagnostics.append(message)
            logger.warning("Skipping document %s", message)
            return []

        links = []
        for ref in refs:
            target = ref.raw_target.strip()
            if not target or target.startswith("#"):
                continue
            links.append(
                LinkReference(
                    source_document=document,
                    raw_target=target,
                    line_number=ref.line_number,
                    column_number=ref.column_number,
                )
            )
        logger.debug("Extracted %d links from %s", len(links), document)
        return links
