"""Render a Report as Markdown for humans and issue trackers."""

from dataclasses import replace
from pathlib import Path

from doclinks.templating import render_template

from .Report import Report
from .ValidationOutcome import ValidationOutcome

REPORT_TEMPLATE = """\
# Link Check Report

| Status | Count |
|--------|------:|
{% for status, count in summary.items() %}
| {{ status }} | {{ count }} |
{% endfor %}

{% if failures %}
## Failures

{% for item in failures %}
- [{{ item.status.value | upper }}] {{ item.link.location }} <{{ item.link.raw_target }}>{% if item.reason %} ({{ item.reason }}){% endif %}

{% endfor %}
{% else %}
No broken links found.
{% endif %}
"""


def render_report(report: Report, root: Path | None = None) -> str:
    """Render ``report``; document paths are shown relative to ``root`` when possible."""
    failures = report.failures
    if root is not None:
        failures = [_relative(item, root) for item in failures]
    return render_template(REPORT_TEMPLATE, {"summary": report.summary, "failures": failures})


def write_report(report: Report, path: Path, root: Path | None = None) -> Path:
    """Write the rendered report to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_report(report, root), encoding="utf-8")
    return path


def _relative(outcome: ValidationOutcome, root: Path) -> ValidationOutcome:
    document = outcome.link.source_document
    try:
        relative = document.relative_to(root.parent if root.is_file() else root)
    except ValueError:
        return outcome
    return replace(outcome, link=replace(outcome.link, source_document=relative))
