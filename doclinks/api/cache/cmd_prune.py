"""Cache prune API command."""

from collections.abc import Iterator

from ..StageResult import StageResult
from ._open_store import _open_store


def cmd_prune(cache_path: str | None = None, max_cache_age: str | None = None) -> StageResult:
    """Remove expired results from the cache file."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        yield (0.2, "Loading configuration...")
        try:
            store = _open_store(cache_path, max_cache_age)
        except ValueError as e:
            result_obj.output = {
                "cache_path": cache_path or "",
                "deleted_count": 0,
                "remaining": 0,
                "errors": [str(e)],
                "warnings": [],
            }
            result_obj.result = f"Invalid configuration: {e}"
            result_obj.success = False
            return

        yield (0.5, "Pruning expired entries...")
        with store:
            deleted = store.prune()
            remaining = len(store)

        errors = [store.persist_error] if store.persist_error else []
        result_obj.output = {
            "cache_path": str(store.path),
            "deleted_count": deleted,
            "remaining": remaining,
            "errors": errors,
            "warnings": store.load_warnings,
        }
        result_obj.result = f"Pruned {deleted} expired entries, {remaining} remain"
        result_obj.success = not errors

    return StageResult(announce="Pruning link cache...", progress_callback=do_work)
