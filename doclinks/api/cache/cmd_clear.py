"""Cache clear API command."""

from collections.abc import Iterator

from ..StageResult import StageResult
from ._open_store import _open_store


def cmd_clear(cache_path: str | None = None) -> StageResult:
    """Remove every result from the cache file."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        yield (0.2, "Loading configuration...")
        try:
            store = _open_store(cache_path, None)
        except ValueError as e:
            result_obj.output = {"cache_path": cache_path or "", "deleted_count": 0, "errors": [str(e)], "warnings": []}
            result_obj.result = f"Invalid configuration: {e}"
            result_obj.success = False
            return

        yield (0.5, "Clearing entries...")
        with store:
            deleted = store.clear()

        errors = [store.persist_error] if store.persist_error else []
        result_obj.output = {
            "cache_path": str(store.path),
            "deleted_count": deleted,
            "errors": errors,
            "warnings": store.load_warnings,
        }
        result_obj.result = f"Cleared {deleted} cached results"
        result_obj.success = not errors

    return StageResult(announce="Clearing link cache...", progress_callback=do_work)
