"""Existence check for http(s) link targets."""

import time
from collections.abc import Callable
from enum import Enum

import requests  # type: ignore

from doclinks.utils.logger import get_logger

from .CheckResult import CheckResult
from .LinkStatus import LinkStatus
from .NormalizedLink import NormalizedLink

logger = get_logger("link.remote")


class _RetryState(Enum):
    ATTEMPT = "attempt"
    WAIT = "wait"
    RETRY = "retry"
    RESOLVE = "resolve"


def classify_status_code(status_code: int) -> CheckResult:
    """Map an HTTP status code to a link status."""
    if 200 <= status_code < 400:
        return CheckResult(LinkStatus.OK, f"HTTP {status_code}")
    return CheckResult(LinkStatus.BROKEN, f"HTTP {status_code}")


class RemoteChecker:
    """Checks a remote target with HEAD, falling back to a ranged GET.

    Each check runs a small state machine::

        ATTEMPT -> RESOLVE                   (response, or permanent failure)
        ATTEMPT -> WAIT -> RETRY -> ...      (timeout or connection error)
        RETRY   -> RESOLVE                   (retries exhausted)

    Timeouts that survive every retry are ``broken``; connection and DNS
    failures are ``error`` so they can be told apart in the report.
    """

    def __init__(
        self,
        timeout: float = 20.0,
        retries: int = 1,
        backoff: float = 1.0,
        user_agent: str = "doclinks",
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.timeout = timeout
        self.retries = retries
        self.backoff = backoff
        self.headers = {"User-Agent": user_agent}
        self.sleep = sleep

    def __call__(self, link: NormalizedLink) -> CheckResult:
        state = _RetryState.ATTEMPT
        attempts = 0
        result: CheckResult | None = None
        last_error: requests.RequestException | None = None

        while state is not _RetryState.RESOLVE:
            if state in (_RetryState.ATTEMPT, _RetryState.RETRY):
                attempts += 1
                try:
                    result = self._probe(link.key)
                    state = _RetryState.RESOLVE
                except (requests.Timeout, requests.ConnectionError) as e:
                    last_error = e
                    state = _RetryState.WAIT if attempts <= self.retries else _RetryState.RESOLVE
                except requests.RequestException as e:
                    result = CheckResult(LinkStatus.ERROR, f"{type(e).__name__}: {e}")
                    state = _RetryState.RESOLVE
            elif state is _RetryState.WAIT:
                delay = self.backoff * (2 ** (attempts - 1))
                logger.debug("Retrying %s in %.1fs after %s", link.key, delay, last_error)
                self.sleep(delay)
                state = _RetryState.RETRY

        if result is not None:
            return result
        # Retries exhausted on a transient failure
        if isinstance(last_error, requests.Timeout):
            return CheckResult(LinkStatus.BROKEN, f"timeout after {attempts} attempts")
        return CheckResult(LinkStatus.ERROR, f"{type(last_error).__name__}: {last_error}")

    def _probe(self, url: str) -> CheckResult:
        response = requests.head(url, headers=self.headers, timeout=self.timeout, allow_redirects=True)
        if response.status_code != 405:
            return classify_status_code(response.status_code)

        headers = {**self.headers, "Range": "bytes=0-0"}
        response = requests.get(url, headers=headers, timeout=self.timeout, allow_redirects=True, stream=True)
        try:
            if response.status_code == 416:
                # Range not satisfiable: the resource exists but is empty
                return CheckResult(LinkStatus.OK, "HTTP 416")
            return classify_status_code(response.status_code)
        finally:
            response.close()
