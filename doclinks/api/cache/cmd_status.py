"""Cache status API command."""

from collections.abc import Iterator

from ..StageResult import StageResult
from ._open_store import _open_store


def cmd_status(cache_path: str | None = None, max_cache_age: str | None = None) -> StageResult:
    """Report how many cached results exist and how many are still fresh."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        yield (0.2, "Loading configuration...")
        try:
            store = _open_store(cache_path, max_cache_age, read_only=True)
        except ValueError as e:
            result_obj.output = {
                "cache_path": cache_path or "",
                "exists": False,
                "entries": 0,
                "fresh": 0,
                "expired": 0,
                "by_status": {},
                "errors": [str(e)],
                "warnings": [],
            }
            result_obj.result = f"Invalid configuration: {e}"
            result_obj.success = False
            return

        yield (0.5, "Reading cache...")
        exists = store.path is not None and store.path.exists()
        with store:
            stats = store.stats()

        result_obj.output = {
            "cache_path": str(store.path),
            "exists": exists,
            **stats,
            "errors": [],
            "warnings": store.load_warnings,
        }
        result_obj.result = f"{stats['entries']} cached results ({stats['fresh']} fresh, {stats['expired']} expired)"
        result_obj.success = True

    return StageResult(announce="Inspecting link cache...", progress_callback=do_work)
