"""Concurrent validation of link references."""

import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path

from doclinks.api.cache.CacheStore import CacheStore
from doclinks.utils.logger import get_logger

from .CheckResult import CheckResult
from .ExclusionRules import ExclusionRules
from .InflightRegistry import InflightRegistry
from .LinkReference import LinkReference
from .LinkStatus import LinkStatus
from .LocalChecker import LocalChecker
from .NormalizedLink import MalformedTargetError, NormalizedLink, normalize_link
from .RemoteChecker import RemoteChecker
from .ValidationOutcome import ValidationOutcome

logger = get_logger("link.validate")

Checker = Callable[[NormalizedLink], CheckResult]

# Only definitive results are reused across runs
_CACHEABLE = (LinkStatus.OK, LinkStatus.BROKEN)


class PoolUnavailableError(RuntimeError):
    """Raised when the worker pool cannot be created."""


class ValidatorPool:
    """Validates LinkReferences on a bounded thread pool.

    Per reference, on the calling thread: exclusion rules first (no I/O at
    all), then the cache. The remaining references are grouped by
    normalized key through an InflightRegistry and each distinct key is
    submitted once, so workers only ever run checks and never wait on each
    other. Fresh ok/broken results are written to the cache as soon as they
    complete.

    With ``run_timeout`` set, references still unresolved when it expires
    become ``error`` with reason ``timeout`` and ``validate`` returns
    without joining the workers. Checks already running are not
    interrupted: the interpreter still joins those threads at exit, which
    can take up to the request timeout times the attempts per check.
    """

    def __init__(
        self,
        base_dir: Path,
        cache: CacheStore | None = None,
        exclusions: ExclusionRules | None = None,
        concurrency: int = 8,
        run_timeout: float | None = None,
        remote_checker: Checker | None = None,
        local_checker: Checker | None = None,
    ):
        self.base_dir = base_dir
        self.cache = cache
        self.exclusions = exclusions or ExclusionRules()
        self.concurrency = concurrency
        self.run_timeout = run_timeout
        self.remote_checker = remote_checker or RemoteChecker()
        self.local_checker = local_checker or LocalChecker()
        self.checks_issued = 0
        self._count_lock = threading.Lock()

    def validate(self, links: Iterable[LinkReference]) -> list[ValidationOutcome]:
        """Return one outcome per reference, in input order.

        Raises:
            PoolUnavailableError: If the thread pool cannot be created
        """
        refs = list(links)
        outcomes: list[ValidationOutcome | None] = [None] * len(refs)
        registry = InflightRegistry()
        waiting: dict[Future, list[int]] = {}
        to_check: list[tuple[Future, NormalizedLink]] = []

        for index, ref in enumerate(refs):
            resolved = self._resolve_without_check(ref)
            if isinstance(resolved, ValidationOutcome):
                outcomes[index] = resolved
                continue
            token, owner = registry.claim(resolved.key)
            if owner:
                to_check.append((token, resolved))
            waiting.setdefault(token, []).append(index)

        if to_check:
            self._run_checks(refs, outcomes, registry, waiting, to_check)
        return [outcome for outcome in outcomes if outcome is not None]

    def _run_checks(
        self,
        refs: list[LinkReference],
        outcomes: list[ValidationOutcome | None],
        registry: InflightRegistry,
        waiting: dict[Future, list[int]],
        to_check: list[tuple[Future, NormalizedLink]],
    ) -> None:
        try:
            executor = ThreadPoolExecutor(max_workers=self.concurrency, thread_name_prefix="doclinks-check")
        except (ValueError, RuntimeError) as e:
            raise PoolUnavailableError(f"Cannot start worker pool: {e}") from e

        timed_out = False
        try:
            for token, link in to_check:
                executor.submit(self._check_and_resolve, link, token, registry)
            done, not_done = wait(waiting, timeout=self.run_timeout)
            for token in done:
                result: CheckResult = token.result()
                for index in waiting[token]:
                    outcomes[index] = ValidationOutcome(refs[index], result.status, result.reason)
            for token in not_done:
                timed_out = True
                for index in waiting[token]:
                    outcomes[index] = ValidationOutcome(refs[index], LinkStatus.ERROR, "timeout")
        finally:
            executor.shutdown(wait=not timed_out, cancel_futures=True)

        if timed_out:
            logger.warning("Run timeout of %ss expired; unresolved links marked as errors", self.run_timeout)

    def _resolve_without_check(self, ref: LinkReference) -> ValidationOutcome | NormalizedLink:
        """Outcome decided by policy or cache, else the link still to check."""
        try:
            link = normalize_link(ref.raw_target, ref.source_document, self.base_dir)
        except MalformedTargetError as e:
            return ValidationOutcome(ref, LinkStatus.ERROR, f"malformed target: {e}")

        pattern = self.exclusions.match(link.key)
        if pattern is not None:
            return ValidationOutcome(ref, LinkStatus.EXCLUDED, f"matches {pattern}")
        if link.kind == "other":
            return ValidationOutcome(ref, LinkStatus.EXCLUDED, f"unsupported scheme {link.scheme}")

        if self.cache is not None:
            entry = self.cache.lookup(link.key)
            if entry is not None and entry.status in _CACHEABLE:
                return ValidationOutcome(ref, entry.status, entry.reason, cached=True)
        return link

    def _check_and_resolve(self, link: NormalizedLink, token: Future, registry: InflightRegistry) -> None:
        result = CheckResult(LinkStatus.ERROR, "check did not complete")
        try:
            result = self._check(link)
            if self.cache is not None and result.status in _CACHEABLE:
                self.cache.record(link.key, result.status, result.reason)
        except Exception as e:
            logger.exception("Check of %s failed", link.key)
            result = CheckResult(LinkStatus.ERROR, f"{type(e).__name__}: {e}")
        finally:
            registry.resolve(token, result)

    def _check(self, link: NormalizedLink) -> CheckResult:
        with self._count_lock:
            self.checks_issued += 1
        logger.debug("Checking %s", link.key)
        if link.kind == "remote":
            return self.remote_checker(link)
        return self.local_checker(link)
