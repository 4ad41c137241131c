"""Unit tests for doclinks.api.link.ValidatorPool."""

import threading
from datetime import timedelta
from pathlib import Path

import pytest

from doclinks.api.cache.CacheStore import CacheStore
from doclinks.api.link.CheckResult import CheckResult
from doclinks.api.link.ExclusionRules import ExclusionRules
from doclinks.api.link.LinkReference import LinkReference
from doclinks.api.link.LinkStatus import LinkStatus
from doclinks.api.link.Report import Report
from doclinks.api.link.ValidatorPool import ValidatorPool

pytestmark = pytest.mark.link


def _ref(target: str, document: str = "doc.md", line: int = 1, root: Path = Path("/docs")) -> LinkReference:
    return LinkReference(root / document, target, line)


def test_excluded_links_are_never_checked(tmp_path, recording_checker):
    remote = recording_checker()
    local = recording_checker()
    cache = CacheStore(tmp_path / "cache.jsonl", timedelta(days=1))
    pool = ValidatorPool(
        base_dir=tmp_path,
        cache=cache,
        exclusions=ExclusionRules([r"twitter\.com", r"/private/"]),
        remote_checker=remote,
        local_checker=local,
    )

    outcomes = pool.validate(
        [_ref("https://twitter.com/x", root=tmp_path), _ref("private/notes.md", root=tmp_path)]
    )

    assert [outcome.status for outcome in outcomes] == [LinkStatus.EXCLUDED, LinkStatus.EXCLUDED]
    assert outcomes[0].reason == r"matches twitter\.com"
    assert remote.calls == []
    assert local.calls == []
    assert len(cache) == 0
    assert pool.checks_issued == 0


def test_shared_target_is_checked_once(tmp_path, recording_checker):
    remote = recording_checker(delay=0.05)
    pool = ValidatorPool(base_dir=tmp_path, concurrency=5, remote_checker=remote)

    refs = [_ref("https://example.com/shared#part", document=f"doc{i}.md", root=tmp_path) for i in range(5)]
    outcomes = pool.validate(refs)

    assert remote.calls == ["https://example.com/shared"]
    assert [outcome.status for outcome in outcomes] == [LinkStatus.OK] * 5
    assert [outcome.link for outcome in outcomes] == refs


def test_run_timeout_marks_pending_checks_as_errors(tmp_path):
    release = threading.Event()

    def blocked(_link):
        release.wait(10)
        return CheckResult(LinkStatus.OK)

    pool = ValidatorPool(base_dir=tmp_path, concurrency=5, run_timeout=0.5, remote_checker=blocked)
    refs = [_ref(f"https://example.com/{i}", line=i, root=tmp_path) for i in range(3)]
    try:
        outcomes = pool.validate(refs)
    finally:
        release.set()

    assert [(outcome.status, outcome.reason) for outcome in outcomes] == [(LinkStatus.ERROR, "timeout")] * 3


def test_completed_checks_survive_run_timeout(tmp_path):
    release = threading.Event()

    def checker(link):
        if link.key.endswith("/slow"):
            release.wait(10)
        return CheckResult(LinkStatus.OK, "HTTP 200")

    pool = ValidatorPool(base_dir=tmp_path, concurrency=2, run_timeout=0.5, remote_checker=checker)
    try:
        fast, slow = pool.validate(
            [_ref("https://example.com/fast", root=tmp_path), _ref("https://example.com/slow", root=tmp_path)]
        )
    finally:
        release.set()

    assert fast.status == LinkStatus.OK
    assert slow.status == LinkStatus.ERROR


def test_results_are_written_back_and_reused(tmp_path, recording_checker):
    (tmp_path / "exists.md").write_text("x")
    cache_file = tmp_path / "cache.jsonl"
    refs = [
        _ref("https://example.com/ok", root=tmp_path),
        _ref("https://example.com/gone", root=tmp_path),
        _ref("exists.md", line=2, root=tmp_path),
        _ref("missing.md", line=3, root=tmp_path),
    ]

    cold_remote = recording_checker({"https://example.com/gone": LinkStatus.BROKEN})
    with CacheStore(cache_file, timedelta(days=1)) as cache:
        cold = ValidatorPool(base_dir=tmp_path, cache=cache, remote_checker=cold_remote).validate(refs)
        assert cache.lookup("https://example.com/gone").status == LinkStatus.BROKEN
        assert cache.lookup((tmp_path / "missing.md").as_uri()).status == LinkStatus.BROKEN

    warm_remote = recording_checker()
    warm_local = recording_checker()
    with CacheStore(cache_file, timedelta(days=1)) as cache:
        warm = ValidatorPool(
            base_dir=tmp_path, cache=cache, remote_checker=warm_remote, local_checker=warm_local
        ).validate(refs)

    assert warm_remote.calls == []
    assert warm_local.calls == []
    assert all(outcome.cached for outcome in warm)
    assert Report.from_outcomes(cold) == Report.from_outcomes(warm)


def test_errors_are_not_cached(tmp_path, recording_checker):
    remote = recording_checker({"https://example.com/flaky": LinkStatus.ERROR})
    cache = CacheStore(tmp_path / "cache.jsonl", timedelta(days=1))
    ValidatorPool(base_dir=tmp_path, cache=cache, remote_checker=remote).validate(
        [_ref("https://example.com/flaky", root=tmp_path)]
    )
    assert cache.lookup("https://example.com/flaky") is None


def test_unsupported_scheme_is_excluded(tmp_path, recording_checker):
    remote = recording_checker()
    (outcome,) = ValidatorPool(base_dir=tmp_path, remote_checker=remote).validate(
        [_ref("mailto:team@example.com", root=tmp_path)]
    )
    assert outcome.status == LinkStatus.EXCLUDED
    assert outcome.reason == "unsupported scheme mailto"
    assert remote.calls == []


def test_malformed_target_is_error(tmp_path, recording_checker):
    (outcome,) = ValidatorPool(base_dir=tmp_path, remote_checker=recording_checker()).validate(
        [_ref("http://", root=tmp_path)]
    )
    assert outcome.status == LinkStatus.ERROR
    assert outcome.reason.startswith("malformed target")


def test_checker_exception_becomes_error(tmp_path):
    def explode(_link):
        raise RuntimeError("boom")

    (outcome,) = ValidatorPool(base_dir=tmp_path, remote_checker=explode).validate(
        [_ref("https://example.com/", root=tmp_path)]
    )
    assert outcome.status == LinkStatus.ERROR
    assert "boom" in outcome.reason


def test_missing_local_file_is_broken(tmp_path):
    (outcome,) = ValidatorPool(base_dir=tmp_path).validate([_ref("nowhere.md", root=tmp_path)])
    assert outcome.status == LinkStatus.BROKEN
    assert outcome.reason == "file not found"


def test_duplicate_references_do_not_occupy_workers(tmp_path):
    release = threading.Event()
    calls: list[str] = []

    def checker(link):
        calls.append(link.key)
        if link.key.endswith("/slow"):
            release.wait(10)
        return CheckResult(LinkStatus.OK, "HTTP 200")

    pool = ValidatorPool(base_dir=tmp_path, concurrency=2, run_timeout=0.5, remote_checker=checker)
    refs = [_ref("https://example.com/slow", document=f"doc{i}.md", root=tmp_path) for i in range(4)]
    refs.append(_ref("https://example.com/fast", document="doc9.md", root=tmp_path))
    try:
        outcomes = pool.validate(refs)
    finally:
        release.set()

    assert [(outcome.status, outcome.reason) for outcome in outcomes[:4]] == [(LinkStatus.ERROR, "timeout")] * 4
    assert outcomes[4].status == LinkStatus.OK
    assert sorted(calls) == ["https://example.com/fast", "https://example.com/slow"]


def test_single_worker_checks_each_key_once(tmp_path, recording_checker):
    remote = recording_checker()
    pool = ValidatorPool(base_dir=tmp_path, concurrency=1, remote_checker=remote)
    refs = [_ref(f"https://example.com/{i % 2}", line=i, root=tmp_path) for i in range(6)]

    outcomes = pool.validate(refs)

    assert sorted(remote.calls) == ["https://example.com/0", "https://example.com/1"]
    assert pool.checks_issued == 2
    assert [outcome.link for outcome in outcomes] == refs
