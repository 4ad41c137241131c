"""Unit tests for doclinks.api.link.LinkExtractor."""

import pytest

from doclinks.api.link.LinkExtractor import LinkExtractor
from doclinks.api.link.LinkReference import LinkReference

pytestmark = pytest.mark.link


def test_extracts_references_with_locations(docs_tree):
    links = list(LinkExtractor(docs_tree, [".md"]))

    assert LinkReference(docs_tree / "index.md", "missing.md", 2, 27) in links
    targets = sorted(link.raw_target for link in links)
    assert targets == sorted(
        [
            "guide.md",
            "missing.md",
            "https://example.com/ok",
            "https://example.com/gone",
            "https://twitter.com/doclinks",
            "index.md#top",
        ]
    )


def test_fragment_only_targets_are_skipped(docs_tree):
    assert all(not link.raw_target.startswith("#") for link in LinkExtractor(docs_tree, [".md"]))


def test_is_restartable(docs_tree):
    extractor = LinkExtractor(docs_tree, [".md"])
    first = list(extractor)
    second = list(extractor)
    assert first == second
    assert extractor.documents == 2


def test_extension_filter_accepts_bare_suffixes(docs_tree):
    (docs_tree / "notes.txt").write_text("https://example.com/notes\n")
    assert {link.raw_target for link in LinkExtractor(docs_tree, ["txt"])} == {"https://example.com/notes"}


def test_excluded_dirnames_are_not_scanned(docs_tree):
    vendored = docs_tree / "node_modules" / "pkg"
    vendored.mkdir(parents=True)
    (vendored / "README.md").write_text("[x](nowhere.md)\n")

    links = list(LinkExtractor(docs_tree, [".md"], exclude_dirnames=["node_modules"]))
    assert all("node_modules" not in str(link.source_document) for link in links)


def test_malformed_document_yields_nothing_and_diagnostic(docs_tree):
    (docs_tree / "broken.md").write_text("[a](a.md)\n```\n[b](b.md)\n")
    (docs_tree / "binary.md").write_bytes(b"\xff\xfe\x00bad")

    extractor = LinkExtractor(docs_tree, [".md"])
    links = list(extractor)

    sources = {link.source_document.name for link in links}
    assert "broken.md" not in sources
    assert "binary.md" not in sources
    assert len(extractor.diagnostics) == 2
    assert any("Unterminated code fence" in message for message in extractor.diagnostics)


def test_single_file_root(docs_tree):
    links = list(LinkExtractor(docs_tree / "guide.md", [".md"]))
    assert [link.raw_target for link in links] == ["index.md#top"]


def test_missing_root_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        list(LinkExtractor(tmp_path / "nope", [".md"]))
