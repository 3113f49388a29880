"""Runner: walks the tree, fans extraction out to workers, builds the Report."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from repo_snapshot.core.aggregator import ReportAggregator
from repo_snapshot.core.config import ScanConfig
from repo_snapshot.core.coverage import aggregate_coverage
from repo_snapshot.core.discover import discover_candidates
from repo_snapshot.core.ignore import IgnoreMatcher, combined_excludes
from repo_snapshot.core.tree import build_tree
from repo_snapshot.errors import ConfigError
from repo_snapshot.extractors import FileResult, extract, file_extension
from repo_snapshot.model.report import Report
from repo_snapshot.utils.determinism import deterministic_timestamp

_logger = logging.getLogger(__name__)


def _extract_one(root: Path, rel_path: str, max_bytes: int) -> FileResult:
    try:
        return extract(root, rel_path, max_bytes)
    except Exception:
        _logger.exception("Extraction of '%s' failed; counting it without metadata", rel_path)
        return FileResult(path=rel_path, extension=file_extension(rel_path))


def _dispatch(
    config: ScanConfig,
    candidates: list[str],
    aggregator: ReportAggregator,
    cancel_event: threading.Event,
) -> tuple[int, bool]:
    """Process *candidates* on a bounded pool; return ``(dispatched, cancelled)``.

    A slot of the semaphore is taken before each submit and given back when
    the worker has merged its result, so at most ``config.workers`` files
    are in flight.  The cancel event is checked before every dispatch; work
    that already started runs to completion and is still merged.
    """
    workers = config.workers
    slots = threading.BoundedSemaphore(workers)
    futures: list[Future[None]] = []
    cancelled = False

    def _run(rel_path: str) -> None:
        try:
            aggregator.merge(_extract_one(config.root, rel_path, config.max_file_bytes))
        finally:
            slots.release()

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="repo-snapshot") as pool:
        for rel_path in candidates:
            if cancel_event.is_set():
                cancelled = True
                break
            slots.acquire()
            if cancel_event.is_set():
                slots.release()
                cancelled = True
                break
            futures.append(pool.submit(_run, rel_path))

    for future in futures:
        future.result()
    return len(futures), cancelled


def scan_repository(
    config: ScanConfig,
    *,
    cancel_event: threading.Event | None = None,
    ci_mode: bool = False,
) -> Report:
    """Scan ``config.root`` and return the finalized ``Report``.

    This is the **only** entry point that wires walk → extraction →
    aggregation.  The scan is best-effort: unreadable directories and
    files are skipped, and setting *cancel_event* stops new work while
    keeping everything already merged.  Only an unusable root raises.
    """
    root = config.root
    if not root.is_dir():
        raise ConfigError(f"path is not a directory: {root}", option="root")
    cancel = cancel_event if cancel_event is not None else threading.Event()
    started = time.monotonic()

    matcher = IgnoreMatcher(root)
    excludes = combined_excludes(config.exclude_globs)
    aggregator = ReportAggregator(
        root=str(root),
        generated_at=deterministic_timestamp(ci_mode),
    )

    # ── 1. walk ─────────────────────────────────────────────────────
    candidates = discover_candidates(
        root,
        matcher,
        excludes=excludes,
        includes=config.include_globs,
    )
    _logger.debug(
        "discovered %d candidate files (%d ignore files loaded)",
        len(candidates),
        matcher.spec_count,
    )

    # ── 2. extract + merge ──────────────────────────────────────────
    dispatched, cancelled = _dispatch(config, candidates, aggregator, cancel)
    if cancelled:
        _logger.warning(
            "Scan cancelled after %d of %d files; report is partial",
            dispatched,
            len(candidates),
        )

    # ── 3. finalize ─────────────────────────────────────────────────
    coverage = None
    inputs = aggregator.coverage_inputs()
    if inputs is not None:
        coverage = aggregate_coverage(root, inputs)

    tree = build_tree(root, config.tree_depth, excludes, matcher)
    report = aggregator.finalize(tree=tree, coverage=coverage, cancelled=cancelled)

    _logger.info(
        "Scanned %s: %d files in %.2fs (cancelled=%s)",
        root,
        report.files_processed,
        time.monotonic() - started,
        cancelled,
    )
    return report
