"""Arena of in-flight checks keyed by normalized link."""

import threading
from concurrent.futures import Future

from .CheckResult import CheckResult


class InflightRegistry:
    """Ensures at most one check per key is ever issued in a run.

    ``claim`` returns the key's token (a Future) and whether the caller owns
    it. Only the owner schedules the check, which calls ``resolve`` when it
    finishes; every other reference to the key attaches to the same token
    and reads the owner's result from it.
    """

    def __init__(self):
        self._tokens: dict[str, Future] = {}
        self._lock = threading.Lock()

    def claim(self, key: str) -> tuple[Future, bool]:
        with self._lock:
            token = self._tokens.get(key)
            if token is not None:
                return token, False
            token = Future()
            token.set_running_or_notify_cancel()
            self._tokens[key] = token
            return token, True

    def resolve(self, token: Future, result: CheckResult) -> None:
        token.set_result(result)

    def __len__(self) -> int:
        return len(self._tokens)
