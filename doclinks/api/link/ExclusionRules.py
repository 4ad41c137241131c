"""Regular-expression exclusion rules applied to normalized targets."""

import re
from collections.abc import Iterable


class ExclusionRules:
    """Patterns that mark matching targets as skipped.

    Patterns are searched (not anchored) in the normalized key, so
    ``twitter\\.com`` excludes every URL on that host.
    """

    def __init__(self, patterns: Iterable[str] = ()):
        self.patterns = [re.compile(pattern) for pattern in patterns]

    def match(self, key: str) -> str | None:
        """Return the first pattern matching ``key``, or None."""
        for pattern in self.patterns:
            if pattern.search(key):
                return pattern.pattern
        return None

    def __bool__(self) -> bool:
        return bool(self.patterns)
