"""CLI tests through typer's CliRunner."""

import json

import pytest
from typer.testing import CliRunner

from doclinks import __version__
from doclinks.cli._create_app import _create_app

pytestmark = pytest.mark.cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_version(runner):
    result = runner.invoke(_create_app(), ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_invalid_display(runner):
    result = runner.invoke(_create_app(), ["--display", "xml", "link", "check", "."])
    assert result.exit_code == 1


def test_check_failing_tree_exits_nonzero(runner, docs_tree, http_responses):
    http_responses["https://example.com/gone"] = 404
    result = runner.invoke(
        _create_app(),
        ["--display", "json", "link", "check", str(docs_tree), "--no-cache", "-x", r"twitter\.com"],
    )

    assert result.exit_code == 1
    output = json.loads(result.stdout)
    assert output["passed"] is False
    assert output["summary"]["broken"] == 2
    assert output["summary"]["excluded"] == 1


def test_check_passing_tree_exits_zero(runner, tmp_path, http_responses):
    (tmp_path / "site").mkdir()
    (tmp_path / "site" / "a.md").write_text("[self](a.md)\n")
    result = runner.invoke(_create_app(), ["-d", "json", "link", "check", str(tmp_path / "site"), "--no-cache"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["passed"] is True


def test_check_writes_report(runner, docs_tree, http_responses, tmp_path):
    report = tmp_path / "out.md"
    result = runner.invoke(
        _create_app(),
        ["link", "check", str(docs_tree), "--cache", str(tmp_path / "c.cache"), "--report", str(report)],
    )
    assert result.exit_code == 1
    assert "missing.md" in report.read_text()
    assert "passed: false" in result.stdout


def test_cache_status_yaml(runner, tmp_path):
    result = runner.invoke(_create_app(), ["cache", "status", "--cache", str(tmp_path / "x.cache")])
    assert result.exit_code == 0
    assert "entries: 0" in result.stdout


def test_link_extract(runner, docs_tree):
    result = runner.invoke(_create_app(), ["-d", "json", "link", "extract", str(docs_tree)])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["count"] == 6


def test_link_extract_config_option(runner, docs_tree, tmp_path):
    config_file = tmp_path / "custom.json"
    (docs_tree / "sub").mkdir()
    (docs_tree / "sub" / "page.md").write_text("[x](../index.md)\n")
    config_file.write_text(json.dumps({"check": {"exclude_dirnames": ["sub"]}}))

    result = runner.invoke(_create_app(), ["-d", "json", "link", "extract", str(docs_tree), "--config", str(config_file)])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["count"] == 6
