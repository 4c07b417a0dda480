"""Build the ReportTree that groups findings by path segment."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from models.report import DirectoryNode, FileNode, ReportImport
from utils import split_segments

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from models.imports import Finding
    from models.report import ReportTree


def _to_report_import(finding: Finding) -> ReportImport:
    return ReportImport(
        import_path=finding.specifier,
        sibling_directory=finding.sibling_module,
        imported_items=list(finding.bindings),
        absolute_path=finding.absolute_path,
    )


def _freeze(nodes: dict[str, dict[str, Any]]) -> ReportTree:
    tree: ReportTree = {}
    for name, node in nodes.items():
        if node["type"] == "file":
            tree[name] = FileNode(imports=node["imports"])
        else:
            tree[name] = DirectoryNode(children=_freeze(node["children"]))
    return tree


def build_report_tree(findings: Iterable[Finding]) -> ReportTree:
    """Group findings into a tree keyed by the segments of their source path.

    Directory segments become ``directory`` nodes and the last segment a
    ``file`` node owning that file's imports in finding order. Joining the
    segments of any file node with ``os.sep`` gives back the finding's
    ``source_file``.
    """
    root: dict[str, dict[str, Any]] = {}

    for finding in findings:
        segments = split_segments(finding.source_file)
        if not segments:
            continue

        current = root
        for part in segments[:-1]:
            node = current.setdefault(part, {"type": "directory", "children": {}})
            current = node["children"]

        file_node = current.setdefault(segments[-1], {"type": "file", "imports": []})
        file_node["imports"].append(_to_report_import(finding))

    return _freeze(root)


def iter_file_nodes(
    tree: ReportTree,
    parents: tuple[str, ...] = (),
) -> Iterator[tuple[str, FileNode]]:
    """Yield ``(relative_path, file_node)`` for every file node, depth first."""
    for name, node in tree.items():
        segments = (*parents, name)
        if isinstance(node, FileNode):
            yield os.path.join(*segments), node
        else:
            yield from iter_file_nodes(node.children, segments)


def count_imports(node: FileNode | DirectoryNode | ReportTree) -> int:
    """Count the imports held by a node or by a whole tree."""
    if isinstance(node, FileNode):
        return len(node.imports)
    if isinstance(node, DirectoryNode):
        return count_imports(node.children)
    return sum(count_imports(child) for child in node.values())


__all__ = ["build_report_tree", "count_imports", "iter_file_nodes"]
