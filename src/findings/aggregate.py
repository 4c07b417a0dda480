"""Accumulate and deduplicate sibling-import findings across files."""

from __future__ import annotations

from typing import TYPE_CHECKING

from report.tree import build_report_tree

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from models.imports import Finding
    from models.report import ReportTree

FindingKey = tuple[str, str, str, tuple[str, ...]]


class FindingSet:
    """Insertion-ordered set of findings keyed by ``Finding.identity_key``.

    The key includes the source file, so identical import lines in two
    different files stay two findings; only repeats within one file collapse.
    """

    def __init__(self, findings: Iterable[Finding] = ()) -> None:
        self._findings: dict[FindingKey, Finding] = {}
        self.extend(findings)

    def add(self, finding: Finding) -> bool:
        """Add a finding; return False when an identical one is already present."""
        key = finding.identity_key
        if key in self._findings:
            return False
        self._findings[key] = finding
        return True

    def extend(self, findings: Iterable[Finding]) -> int:
        """Add several findings and return how many were new."""
        return sum(1 for finding in findings if self.add(finding))

    def __len__(self) -> int:
        return len(self._findings)

    def __iter__(self) -> Iterator[Finding]:
        return iter(self._findings.values())

    def __contains__(self, finding: object) -> bool:
        key = getattr(finding, "identity_key", None)
        return key in self._findings

    @property
    def findings(self) -> list[Finding]:
        return list(self._findings.values())

    @property
    def total(self) -> int:
        return len(self._findings)

    def report_tree(self) -> ReportTree:
        return build_report_tree(self._findings.values())


__all__ = ["FindingSet"]
