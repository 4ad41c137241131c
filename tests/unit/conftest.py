"""Unit test fixtures.

Most configuration helpers are in tests/conftest.py.
This file contains unit-test-specific helpers for running commands and
faking link checks.
"""

import threading
from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from doclinks.api.link.CheckResult import CheckResult
from doclinks.api.link.LinkStatus import LinkStatus
from doclinks.api.link.NormalizedLink import NormalizedLink


class RecordingChecker:
    """Checker double that records every key it is asked about.

    ``statuses`` maps keys to results; anything else is ok.
    """

    def __init__(self, statuses: dict[str, LinkStatus] | None = None, delay: float = 0.0):
        self.statuses = statuses or {}
        self.delay = delay
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def __call__(self, link: NormalizedLink) -> CheckResult:
        with self._lock:
            self.calls.append(link.key)
        if self.delay:
            threading.Event().wait(self.delay)
        status = self.statuses.get(link.key, LinkStatus.OK)
        return CheckResult(status, "fake")


@pytest.fixture
def run_cmd() -> Callable:
    """Execute a cmd function and return the result with progress_callback executed."""

    def _run(cmd_func, *args, **kwargs):
        result = cmd_func(*args, **kwargs)
        list(result.progress_callback(result))
        return result

    return _run


@pytest.fixture
def recording_checker() -> type[RecordingChecker]:
    return RecordingChecker


@pytest.fixture
def http_responses(monkeypatch) -> dict[str, int]:
    """Patch requests.head/get to answer from a url -> status code mapping.

    Unknown URLs answer 200. Returns the mapping so tests can fill it in;
    the patched ``requests.head`` is a MagicMock, so call counts can be
    asserted on it directly.
    """
    statuses: dict[str, int] = {}

    def _respond(url, **_kwargs):
        response = MagicMock()
        response.status_code = statuses.get(url, 200)
        return response

    monkeypatch.setattr("requests.head", MagicMock(side_effect=_respond))
    monkeypatch.setattr("requests.get", MagicMock(side_effect=_respond))
    return statuses
