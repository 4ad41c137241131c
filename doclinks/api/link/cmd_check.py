"""Link check API command."""

from collections.abc import Iterator
from contextlib import nullcontext
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from doclinks.api.cache.CacheStore import CacheStore
from doclinks.api.config.apply_overrides import apply_overrides
from doclinks.api.config.DoclinksConfig import DoclinksConfig
from doclinks.utils.logger import get_logger
from doclinks.utils.normalize_path import normalize_path

from ..StageResult import StageResult
from .ExclusionRules import ExclusionRules
from .LinkExtractor import LinkExtractor
from .RemoteChecker import RemoteChecker
from .render_report import write_report
from .Report import Report
from .ValidatorPool import PoolUnavailableError, ValidatorPool

logger = get_logger("link.check")


def _failed_output(root: str, errors: list[str], warnings: list[str] | None = None) -> dict[str, Any]:
    return {
        "root": root,
        "passed": False,
        "documents": 0,
        "summary": {},
        "failures": [],
        "report_path": None,
        "cache_path": None,
        "errors": errors,
        "warnings": warnings or [],
    }


def cmd_check(
    root: str,
    exclude: list[str] | None = None,
    cache_path: str | None = None,
    max_cache_age: str | None = None,
    concurrency: int | None = None,
    timeout: float | None = None,
    run_timeout: float | None = None,
    base: str | None = None,
    extensions: list[str] | None = None,
    report_path: str | None = None,
    no_cache: bool = False,
    config_path: str | None = None,
) -> StageResult:
    """Check every link under ``root`` and report broken ones.

    Command-line values extend (``exclude``) or replace the loaded
    configuration. The run fails when any link is broken or errored.
    """

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        yield (0.05, "Loading configuration...")
        try:
            loaded = DoclinksConfig.load(Path(config_path) if config_path else None)
            config = apply_overrides(
                loaded,
                exclude=exclude,
                cache_path=cache_path,
                max_cache_age=max_cache_age,
                concurrency=concurrency,
                timeout=timeout,
                run_timeout=run_timeout,
                base=base,
                extensions=extensions,
                no_cache=no_cache,
            )
        except (ValueError, ValidationError) as e:
            result_obj.output = _failed_output(root, [str(e)])
            result_obj.result = f"Invalid configuration: {e}"
            result_obj.success = False
            return

        check_cfg = config.check
        root_path = normalize_path(root)

        yield (0.1, "Extracting links...")
        extractor = LinkExtractor(root_path, check_cfg.extensions, check_cfg.exclude_dirnames)
        try:
            links = list(extractor)
        except (FileNotFoundError, PermissionError, NotADirectoryError) as e:
            result_obj.output = _failed_output(str(root_path), [str(e)])
            result_obj.result = f"Cannot read {root}: {e}"
            result_obj.success = False
            return

        warnings = list(extractor.diagnostics)
        if check_cfg.base:
            base_dir = normalize_path(check_cfg.base)
        else:
            base_dir = root_path if root_path.is_dir() else root_path.parent

        cache = None
        if config.cache.enabled:
            cache = CacheStore(normalize_path(config.cache.path), config.cache.max_age)

        yield (0.3, f"Validating {len(links)} links from {extractor.documents} documents...")
        pool = ValidatorPool(
            base_dir=base_dir,
            cache=cache,
            exclusions=ExclusionRules(check_cfg.exclude),
            concurrency=check_cfg.concurrency,
            run_timeout=check_cfg.run_timeout_secs,
            remote_checker=RemoteChecker(
                timeout=check_cfg.timeout_secs,
                retries=check_cfg.retries,
                backoff=check_cfg.backoff_secs,
                user_agent=check_cfg.user_agent,
            ),
        )
        try:
            with cache if cache is not None else nullcontext():
                outcomes = pool.validate(links)
        except PoolUnavailableError as e:
            result_obj.output = _failed_output(str(root_path), [str(e)], warnings)
            result_obj.result = str(e)
            result_obj.success = False
            return

        if cache is not None:
            warnings.extend(cache.load_warnings)
            if cache.persist_error:
                warnings.append(cache.persist_error)

        yield (0.9, "Aggregating report...")
        report = Report.from_outcomes(outcomes)
        written: Path | None = None
        errors: list[str] = []
        if report_path:
            try:
                written = write_report(report, normalize_path(report_path), root_path)
            except OSError as e:
                errors.append(f"Cannot write report {report_path}: {e}")

        logger.info(
            "Checked %d links (%d checks issued): %s",
            report.summary["total"],
            pool.checks_issued,
            report.summary,
        )

        result_obj.output = {
            "root": str(root_path),
            "passed": report.passed,
            "documents": extractor.documents,
            "summary": report.summary,
            "failures": [outcome.to_dict() for outcome in report.failures],
            "report_path": str(written) if written else None,
            "cache_path": str(cache.path) if cache is not None else None,
            "errors": errors,
            "warnings": warnings,
        }
        failures = len(report.failures)
        if report.passed:
            result_obj.result = f"All {report.summary['total']} links ok ({report.summary['excluded']} excluded)"
        else:
            result_obj.result = f"{failures} of {report.summary['total']} links failed"
        result_obj.success = report.passed and not errors

    return StageResult(announce=f"Checking links under {root}...", progress_callback=do_work)
