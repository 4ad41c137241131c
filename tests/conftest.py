"""Shared pytest configuration and fixtures for all tests."""

from pathlib import Path

import pytest


def pytest_configure(config):
    for marker in ("unit", "smoke", "integration", "config", "link", "cache", "cli"):
        config.addinivalue_line("markers", f"{marker}: {marker} tests")


def pytest_collection_modifyitems(config, items):
    """Automatically apply markers based on test file location."""
    for item in items:
        path_str = str(item.fspath)
        if "/smoke/" in path_str:
            item.add_marker(pytest.mark.smoke)
        elif "/unit/" in path_str:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in path_str:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def doclinks_home(tmp_path: Path, monkeypatch) -> Path:
    """Point DOCLINKS_HOME at an empty temporary directory.

    Keeps tests away from the user's real configuration.
    """
    home = tmp_path / ".doclinks"
    home.mkdir()
    monkeypatch.setenv("DOCLINKS_HOME", str(home))
    return home


@pytest.fixture
def docs_tree(tmp_path: Path) -> Path:
    """A small documentation tree with local, remote and excluded links.

    docs/index.md   line 2: guide.md (exists), missing.md (missing)
                    line 3: https://example.com/ok, https://example.com/gone
                    line 4: https://twitter.com/doclinks
                    line 5: #section (fragment only, not a candidate)
    docs/guide.md   line 1: index.md#top (exists)
    """
    root = tmp_path / "docs"
    root.mkdir()
    (root / "index.md").write_text(
        "# Title\n"
        "See [guide](guide.md) and [missing](missing.md).\n"
        "Remote [site](https://example.com/ok) and [gone](https://example.com/gone).\n"
        "Follow [us](https://twitter.com/doclinks).\n"
        "[anchor](#section)\n",
        encoding="utf-8",
    )
    (root / "guide.md").write_text("Back to [index](index.md#top).\n", encoding="utf-8")
    return root
