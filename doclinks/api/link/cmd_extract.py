"""Link extract API command."""

from collections.abc import Iterator
from pathlib import Path

from doclinks.utils.normalize_path import normalize_path

from ..config.DoclinksConfig import DoclinksConfig
from ..StageResult import StageResult
from .LinkExtractor import LinkExtractor


def cmd_extract(root: str, extensions: list[str] | None = None, config_path: str | None = None) -> StageResult:
    """List every link reference under ``root`` without validating it."""

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        root_path = normalize_path(root)

        yield (0.1, "Loading configuration...")
        try:
            check_cfg = DoclinksConfig.load(Path(config_path) if config_path else None).check
        except ValueError as e:
            result_obj.output = {"root": str(root_path), "count": 0, "links": [], "errors": [str(e)], "warnings": []}
            result_obj.result = f"Invalid configuration: {e}"
            result_obj.success = False
            return

        yield (0.2, "Scanning documents...")
        extractor = LinkExtractor(root_path, extensions or check_cfg.extensions, check_cfg.exclude_dirnames)
        try:
            links = list(extractor)
        except (FileNotFoundError, PermissionError, NotADirectoryError) as e:
            result_obj.output = {"root": str(root_path), "count": 0, "links": [], "errors": [str(e)], "warnings": []}
            result_obj.result = f"Cannot read {root}: {e}"
            result_obj.success = False
            return

        yield (0.9, "Collecting references...")
        result_obj.output = {
            "root": str(root_path),
            "count": len(links),
            "links": [
                {
                    "document": str(link.source_document),
                    "line_number": link.line_number,
                    "column_number": link.column_number,
                    "target": link.raw_target,
                }
                for link in sorted(links, key=lambda link: link.sort_key())
            ],
            "errors": [],
            "warnings": extractor.diagnostics,
        }
        doc_word = "document" if extractor.documents == 1 else "documents"
        result_obj.result = f"Found {len(links)} links in {extractor.documents} {doc_word}"
        result_obj.success = True

    return StageResult(announce=f"Extracting links under {root}...", progress_callback=do_work)
