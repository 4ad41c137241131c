"""Existence check for local link targets."""

from .CheckResult import CheckResult
from .LinkStatus import LinkStatus
from .NormalizedLink import NormalizedLink


class LocalChecker:
    """A local target is ok when its path exists on the filesystem."""

    def __call__(self, link: NormalizedLink) -> CheckResult:
        if link.path is None:
            return CheckResult(LinkStatus.ERROR, "not a local target")
        try:
            exists = link.path.exists()
        except OSError as e:
            return CheckResult(LinkStatus.ERROR, f"cannot stat: {e}")
        if exists:
            return CheckResult(LinkStatus.OK)
        return CheckResult(LinkStatus.BROKEN, "file not found")
