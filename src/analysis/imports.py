"""Run the sibling import analysis for one target directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from errors import ParseError, require_directory
from findings.aggregate import FindingSet
from models.imports import ImportRecord, ParseDiagnostic
from parse.treesitter_imports import extract_file_imports
from report.document import build_import_report
from resolve.siblings import AnalysisContext, classify_record, finding_from_record
from scan.files import find_source_files
from scan.siblings import build_module_set
from utils import normalize_path, relative_to_scope

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

    from models.imports import Finding
    from models.report import ImportReport, ReportTree

logger = logging.getLogger(__name__)


@dataclass
class ImportAnalysis:
    """Outcome of one analysis run over a target directory."""

    context: AnalysisContext
    findings: FindingSet = field(default_factory=FindingSet)
    records: list[ImportRecord] = field(default_factory=list)
    diagnostics: list[ParseDiagnostic] = field(default_factory=list)
    files_scanned: int = 0

    @property
    def total(self) -> int:
        return len(self.findings)

    def finding_list(self) -> list[Finding]:
        return self.findings.findings

    def report_tree(self) -> ReportTree:
        return self.findings.report_tree()

    def to_report(self, *, analyzed_at: datetime | None = None) -> ImportReport:
        return build_import_report(
            self.context.target_dir,
            self.findings.findings,
            analyzed_at=analyzed_at,
        )


def _records_for_file(file_path: Path, source_file: str) -> list[ImportRecord]:
    declarations = extract_file_imports(file_path, source_file)
    return [
        ImportRecord(
            source_file=source_file,
            directory=str(file_path.parent),
            specifier=declaration.specifier,
            bindings=declaration.bindings,
            absolute_path=str(file_path),
        )
        for declaration in declarations
    ]


def analyze_imports(
    target_dir: Path,
    *,
    scope_dir: Path | None = None,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    respect_gitignore: bool = False,
    nested_gitignore: bool = False,
) -> ImportAnalysis:
    """Find every import in ``target_dir`` that reaches into a sibling directory.

    Args:
        target_dir: Feature directory whose files are analyzed
        scope_dir: Directory whose immediate children are the sibling
            modules; defaults to the parent of ``target_dir``. Source paths
            in findings are relative to it.
        include_patterns: fnmatch patterns passed to the source scanner
        exclude_patterns: fnmatch patterns passed to the source scanner
        respect_gitignore: Skip files matched by the target's ``.gitignore``
        nested_gitignore: Compose nested ``.gitignore`` files as well

    Returns:
        ImportAnalysis holding deduplicated findings in discovery order,
        every classified import record and one diagnostic per skipped file.

    Raises:
        DirectoryNotFoundError: If the target or scope directory is missing.
    """
    require_directory(target_dir)
    target = normalize_path(target_dir)
    scope = normalize_path(scope_dir) if scope_dir is not None else target.parent

    context = AnalysisContext(
        target_dir=target,
        scope_dir=scope,
        module_set=build_module_set(target, scope),
    )
    analysis = ImportAnalysis(context=context)
    logger.debug(
        "Analyzing %s against siblings: %s",
        target,
        ", ".join(context.module_set) or "<none>",
    )

    processed: set[Path] = set()
    for file_path in find_source_files(
        target,
        include_patterns=include_patterns,
        exclude_patterns=exclude_patterns,
        respect_gitignore=respect_gitignore,
        nested_gitignore=nested_gitignore,
    ):
        resolved = file_path.resolve()
        if resolved in processed:
            continue
        processed.add(resolved)
        analysis.files_scanned += 1

        source_file = relative_to_scope(file_path, scope)
        try:
            records = _records_for_file(file_path, source_file)
        except ParseError as exc:
            logger.warning("Error parsing file %s: %s", exc.path, exc.message)
            analysis.diagnostics.append(
                ParseDiagnostic(path=exc.path, message=exc.message)
            )
            continue

        for record in records:
            classified = classify_record(record, context)
            analysis.records.append(classified)
            finding = finding_from_record(classified)
            if finding is not None:
                analysis.findings.add(finding)

    logger.info(
        "Found %d sibling import(s) in %d file(s) under %s",
        analysis.total,
        analysis.files_scanned,
        target,
    )
    return analysis


__all__ = ["ImportAnalysis", "analyze_imports"]
