"""Command-line interface for boundarymap."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from analysis.imports import analyze_imports
from analysis.siblings import analyze_sibling_directories
from artifacts.write import (
    write_analysis,
    write_sibling_reports,
    write_structure_report,
)
from contract.artifacts import siblings_reports_dirname, structure_reports_dirname
from contract.validation import validate_report
from errors import BoundaryMapError, DirectoryNotFoundError
from report.document import describe_finding
from rules.config import ConfigError, load_config, resolve_output_dir
from structure.analyzer import analyze_structure
from verify.verify import verify_report

if TYPE_CHECKING:
    from rules.config import BoundaryMapConfig


def _add_directory(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument("directory", help=help_text)


def _add_out_dir(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated reports (default: config output dir)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boundarymap",
        description="Analyze cross-feature imports in JavaScript/TypeScript projects",
    )
    parser.add_argument(
        "--project-root",
        default=".",
        help="Directory holding boundarymap.toml (default: .)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check", help="Analyze imports for a single directory"
    )
    _add_directory(check_parser, "Target directory to analyze")
    check_parser.add_argument(
        "--scope",
        default=None,
        help="Directory whose children are the sibling modules (default: parent)",
    )
    _add_out_dir(check_parser)
    check_parser.add_argument(
        "--fail-on-findings",
        action="store_true",
        help="Exit with status 1 when sibling imports are found",
    )

    siblings_parser = subparsers.add_parser(
        "check-siblings", help="Analyze imports for all sibling directories"
    )
    _add_directory(siblings_parser, "Parent directory containing siblings to analyze")
    _add_out_dir(siblings_parser)

    structure_parser = subparsers.add_parser(
        "structure", help="Flag directories holding several component files"
    )
    _add_directory(structure_parser, "Directory to analyze recursively")
    structure_parser.add_argument(
        "--skip",
        action="append",
        default=None,
        metavar="NAME",
        help="Directory name exempt from the check (repeatable; default: config)",
    )
    _add_out_dir(structure_parser)

    validate_parser = subparsers.add_parser(
        "validate", help="Validate a persisted report"
    )
    validate_parser.add_argument("report", help="Path to a report JSON file")

    verify_parser = subparsers.add_parser(
        "verify", help="Verify a persisted import report against the sources"
    )
    _add_directory(verify_parser, "Directory the report was generated for")
    verify_parser.add_argument(
        "--report",
        required=True,
        help="Path to import-analysis.json",
    )
    verify_parser.add_argument(
        "--scope",
        default=None,
        help="Directory whose children are the sibling modules (default: parent)",
    )

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _resolve_path(value: str) -> Path:
    return Path(value).expanduser().resolve()


def _resolve_reports_dir(
    root: Path,
    config: BoundaryMapConfig,
    out_dir: str | None,
) -> Path:
    if out_dir is None:
        return resolve_output_dir(root, config.output_dir)
    return _resolve_path(out_dir)


def _handle_check(
    config: BoundaryMapConfig,
    reports_dir: Path,
    directory: str,
    scope: str | None,
    *,
    fail_on_findings: bool,
) -> int:
    target = _resolve_path(directory)
    sys.stdout.write(f"Analyzing imports in: {target}\n")

    analysis = analyze_imports(
        target,
        scope_dir=_resolve_path(scope) if scope is not None else None,
        **config.scan_options(),
    )
    report_path = write_analysis(analysis, reports_dir)

    if analysis.total == 0:
        sys.stdout.write("No cross-feature imports found\n")
    else:
        sys.stdout.write("Found cross-directory imports:\n")
        for finding in analysis.findings:
            sys.stdout.write(f"  {describe_finding(finding)}\n")
    sys.stdout.write(f"Generated JSON report: {report_path}\n")

    if fail_on_findings and analysis.total:
        return 1
    return 0


def _handle_check_siblings(
    config: BoundaryMapConfig,
    reports_dir: Path,
    directory: str,
) -> int:
    parent = _resolve_path(directory)
    runs = analyze_sibling_directories(parent, **config.scan_options())
    batch_dir = reports_dir / siblings_reports_dirname(parent.name)
    index = write_sibling_reports(runs, parent_dir=parent, reports_dir=batch_dir)

    for entry in index.reports:
        if entry.error is not None:
            sys.stderr.write(f"{entry.directory}: error: {entry.error}\n")
        elif entry.import_count == 0:
            sys.stdout.write(f"{entry.directory}: no cross-feature imports\n")
        else:
            sys.stdout.write(
                f"{entry.directory}: {entry.import_count} cross-feature import(s)\n"
            )
    sys.stdout.write(f"Generated reports in: {batch_dir}\n")

    return 1 if any(entry.error is not None for entry in index.reports) else 0


def _handle_structure(
    config: BoundaryMapConfig,
    reports_dir: Path,
    directory: str,
    skip: list[str] | None,
) -> int:
    root = _resolve_path(directory)
    skip_directories = skip if skip is not None else config.structure.skip_directories
    report = analyze_structure(root, skip_directories=skip_directories)
    report_path = write_structure_report(
        report, reports_dir / structure_reports_dirname(root.name)
    )

    for violation in report.violations:
        sys.stdout.write(f"{violation.directory}: {violation.message}\n")
    sys.stdout.write(f"Generated JSON report: {report_path}\n")

    return 1 if report.violations else 0


def _handle_validate(report: str) -> int:
    result = validate_report(_resolve_path(report))

    for warning in result.warnings:
        sys.stderr.write(f"warning: {warning.location()}: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(
    config: BoundaryMapConfig,
    directory: str,
    report: str,
    scope: str | None,
) -> int:
    report_path = _resolve_path(report)
    try:
        result = verify_report(
            target_dir=_resolve_path(directory),
            report_path=report_path,
            scope_dir=_resolve_path(scope) if scope is not None else None,
            **config.scan_options(),
        )
    except DirectoryNotFoundError:
        raise
    except (FileNotFoundError, ValueError) as exc:
        sys.stderr.write(f"report: {report_path}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, entries in (("missing", result.missing), ("extra", result.extra)):
            for entry in entries:
                sys.stderr.write(f"{label}: {entry}\n")
        return 1
    return 0


def _dispatch(args: argparse.Namespace) -> int:
    if args.command == "validate":
        return _handle_validate(args.report)

    root = _resolve_path(args.project_root)
    config = load_config(root)

    if args.command == "verify":
        return _handle_verify(config, args.directory, args.report, args.scope)

    reports_dir = _resolve_reports_dir(root, config, args.out_dir)

    if args.command == "check":
        return _handle_check(
            config,
            reports_dir,
            args.directory,
            args.scope,
            fail_on_findings=args.fail_on_findings,
        )

    if args.command == "check-siblings":
        return _handle_check_siblings(config, reports_dir, args.directory)

    if args.command == "structure":
        return _handle_structure(config, reports_dir, args.directory, args.skip)

    raise AssertionError


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        return _dispatch(args)
    except (BoundaryMapError, ConfigError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
