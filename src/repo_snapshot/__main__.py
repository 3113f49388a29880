"""CLI entry-point for repo_snapshot.

Usage:
    python -m repo_snapshot [--root DIR] [--out LLM_SUMMARY.md] [--threads N]
    python -m repo_snapshot scan --root <dir> --out <file> [--include GLOBS] [--exclude GLOBS]
    python -m repo_snapshot validate <instance.json>
"""

from __future__ import annotations

import argparse
import json
import logging
import signal
import sys
import threading
import time
from pathlib import Path

import jsonschema

from repo_snapshot import __version__
from repo_snapshot.api import render_artifacts, scan_project
from repo_snapshot.contracts.load import REPORT_SCHEMA, validate_instance
from repo_snapshot.errors import ConfigError
from repo_snapshot.utils.determinism import is_ci_mode
from repo_snapshot.utils.exit_codes import ExitCode

_logger = logging.getLogger("repo_snapshot")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr)


def _add_scan_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--root",
        default=".",
        help="Repository root to scan (default: current directory).",
    )
    p.add_argument(
        "--out",
        default="LLM_SUMMARY.md",
        help="Markdown output path; JSON goes to <out>.json (default: LLM_SUMMARY.md).",
    )
    p.add_argument(
        "--max-bytes-per-file",
        dest="max_bytes",
        type=int,
        default=None,
        help="Maximum bytes read from the head of each file (default: 65536).",
    )
    p.add_argument(
        "--threads",
        type=int,
        default=None,
        help="Number of worker threads (default: CPU count).",
    )
    p.add_argument(
        "--include",
        default="",
        help="Comma-separated globs to include even when excluded.",
    )
    p.add_argument(
        "--exclude",
        default="",
        help="Comma-separated globs to exclude in addition to the defaults.",
    )
    p.add_argument(
        "--tree-depth",
        dest="tree_depth",
        type=int,
        default=None,
        help="Maximum depth of the repository tree (default: 3).",
    )
    p.add_argument(
        "--ci",
        "--deterministic",
        dest="ci_mode",
        action="store_true",
        default=False,
        help="Enable deterministic output (fixed timestamp).",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="repo-snapshot",
        description="Condensed, LLM-oriented snapshot of a source repository.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = p.add_subparsers(dest="command")

    # ── scan subcommand ─────────────────────────────────────────────
    scan_p = sub.add_parser(
        "scan",
        help="Scan a repository and write the Markdown + JSON snapshot.",
    )
    _add_scan_options(scan_p)

    # ── validate subcommand ─────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Validate a report JSON file against the bundled schema.",
    )
    val_p.add_argument("instance", help="Path to the JSON report.")
    val_p.add_argument(
        "schema_name",
        nargs="?",
        default=REPORT_SCHEMA,
        help=f"Schema filename (default: {REPORT_SCHEMA}).",
    )
    return p


def _install_signal_handlers(cancel: threading.Event) -> dict[int, object]:
    """Route SIGINT/SIGTERM to *cancel*; return the previous handlers."""

    def _handler(signum: int, _frame: object) -> None:
        _logger.warning("Received signal %d, stopping after in-flight files", signum)
        cancel.set()

    previous: dict[int, object] = {}
    if threading.current_thread() is not threading.main_thread():
        return previous
    for sig in (signal.SIGINT, signal.SIGTERM):
        previous[sig] = signal.signal(sig, _handler)
    return previous


def _restore_signal_handlers(previous: dict[int, object]) -> None:
    for sig, handler in previous.items():
        signal.signal(sig, handler)


def _handle_scan(args: argparse.Namespace) -> int:
    ci_mode = bool(args.ci_mode) or is_ci_mode()
    started = time.monotonic()
    cancel = threading.Event()
    previous = _install_signal_handlers(cancel)
    try:
        report, _ = scan_project(
            args.root,
            max_file_bytes=args.max_bytes,
            threads=args.threads,
            include=args.include,
            exclude=args.exclude,
            tree_depth=args.tree_depth,
            ci_mode=ci_mode,
            cancel_event=cancel,
        )
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR
    finally:
        _restore_signal_handlers(previous)

    markdown, json_text = render_artifacts(report, ci_mode=ci_mode)
    md_path = Path(args.out)
    json_path = Path(args.out + ".json")
    try:
        md_path.parent.mkdir(parents=True, exist_ok=True)
        md_path.write_text(markdown, encoding="utf-8")
        json_path.write_text(json_text, encoding="utf-8")
    except OSError as e:
        print(f"error: cannot write output: {e}", file=sys.stderr)
        return ExitCode.ERROR

    elapsed = time.monotonic() - started
    print(f"Generated {md_path} and {json_path} in {elapsed:.2f}s")
    if report.cancelled:
        print("warning: scan was interrupted; the snapshot is partial", file=sys.stderr)
        return ExitCode.INTERRUPTED
    return ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    # Exit code contract:
    #   1 = schema violation
    #   2 = unreadable file / unknown schema / bad JSON
    try:
        instance = json.loads(Path(args.instance).read_text(encoding="utf-8"))
        validate_instance(instance, args.schema_name)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, ValueError, jsonschema.SchemaError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Entry-point; returns an exit code (see ``ExitCode``)."""
    effective_argv = list(argv) if argv is not None else sys.argv[1:]

    # `repo-snapshot --root X` without a subcommand means `scan`.
    known_commands = {"scan", "validate"}
    first = effective_argv[0] if effective_argv else None
    if first not in known_commands and first not in ("-h", "--help", "--version"):
        effective_argv = ["scan"] + effective_argv

    args = _build_parser().parse_args(effective_argv)

    if args.command == "validate":
        return _handle_validate(args)

    _configure_logging(args.verbose)
    return _handle_scan(args)


if __name__ == "__main__":
    raise SystemExit(main())
