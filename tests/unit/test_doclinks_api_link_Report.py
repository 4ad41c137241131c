"""Unit tests for doclinks.api.link.Report and its Markdown rendering."""

from pathlib import Path

import pytest

from doclinks.api.link.LinkReference import LinkReference
from doclinks.api.link.LinkStatus import LinkStatus
from doclinks.api.link.render_report import render_report, write_report
from doclinks.api.link.Report import Report
from doclinks.api.link.ValidationOutcome import ValidationOutcome

pytestmark = pytest.mark.link

ROOT = Path("/site")


def _outcome(document: str, line: int, status: LinkStatus, target: str = "t", reason: str = "", column: int = 1):
    return ValidationOutcome(LinkReference(ROOT / document, target, line, column), status, reason)


def test_orders_by_document_line_and_column():
    outcomes = [
        _outcome("b.md", 1, LinkStatus.OK),
        _outcome("a.md", 9, LinkStatus.OK),
        _outcome("a.md", 2, LinkStatus.OK, column=7),
        _outcome("a.md", 2, LinkStatus.OK, column=3),
    ]
    report = Report.from_outcomes(outcomes)
    assert [(o.link.source_document.name, o.link.line_number, o.link.column_number) for o in report.outcomes] == [
        ("a.md", 2, 3),
        ("a.md", 2, 7),
        ("a.md", 9, 1),
        ("b.md", 1, 1),
    ]


def test_input_order_does_not_matter():
    outcomes = [_outcome("a.md", i, LinkStatus.OK) for i in range(5)]
    assert Report.from_outcomes(outcomes) == Report.from_outcomes(reversed(outcomes))


def test_summary_counts():
    report = Report.from_outcomes(
        [
            _outcome("a.md", 1, LinkStatus.OK),
            _outcome("a.md", 2, LinkStatus.BROKEN),
            _outcome("a.md", 3, LinkStatus.EXCLUDED),
            _outcome("a.md", 4, LinkStatus.ERROR),
        ]
    )
    assert report.summary == {"ok": 1, "broken": 1, "excluded": 1, "error": 1, "total": 4, "cached": 0}


def test_excluded_does_not_fail():
    report = Report.from_outcomes([_outcome("a.md", 1, LinkStatus.OK), _outcome("a.md", 2, LinkStatus.EXCLUDED)])
    assert report.passed
    assert report.failures == []


@pytest.mark.parametrize("status", [LinkStatus.BROKEN, LinkStatus.ERROR])
def test_broken_or_error_fails(status):
    report = Report.from_outcomes([_outcome("a.md", 1, LinkStatus.OK), _outcome("a.md", 2, status)])
    assert not report.passed
    assert [outcome.status for outcome in report.failures] == [status]


def test_empty_report_passes():
    report = Report.from_outcomes([])
    assert report.passed
    assert report.summary["total"] == 0


def test_render_lists_failures_relative_to_root():
    report = Report.from_outcomes(
        [
            _outcome("docs/a.md", 12, LinkStatus.BROKEN, "https://example.com/gone", "HTTP 404"),
            _outcome("docs/a.md", 3, LinkStatus.OK, "https://example.com/ok"),
        ]
    )
    text = render_report(report, ROOT)

    assert "- [BROKEN] docs/a.md:12 <https://example.com/gone> (HTTP 404)" in text
    assert "https://example.com/ok" not in text
    assert "| broken | 1 |" in text


def test_render_passing_report():
    text = render_report(Report.from_outcomes([_outcome("a.md", 1, LinkStatus.OK)]))
    assert "No broken links found." in text


def test_write_report_creates_parents(tmp_path):
    target = tmp_path / "out" / "report.md"
    written = write_report(Report.from_outcomes([]), target)
    assert written == target
    assert target.read_text().startswith("# Link Check Report")
