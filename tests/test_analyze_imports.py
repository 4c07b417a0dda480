from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import pytest

from analysis.imports import analyze_imports
from errors import DirectoryNotFoundError

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _make_src(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    for name in ("feature-a", "feature-b", "feature-c"):
        (src / name).mkdir(parents=True)
    return src


def test_scenario_relative_sibling_import(tmp_path: Path) -> None:
    src = _make_src(tmp_path)
    _write(
        src / "feature-a" / "x.ts",
        'import { helper } from "../feature-b/helper";\n',
    )

    analysis = analyze_imports(src / "feature-a")

    assert analysis.total == 1
    finding = analysis.finding_list()[0]
    assert finding.source_file == os.path.join("feature-a", "x.ts")
    assert finding.sibling_module == "feature-b"
    assert finding.bindings == ("helper",)
    assert finding.absolute_path == str(src / "feature-a" / "x.ts")


def test_scenario_default_and_renamed_bindings(tmp_path: Path) -> None:
    src = _make_src(tmp_path)
    _write(
        src / "feature-a" / "y.tsx",
        'import Default, { a as b } from "../feature-b/mod";\n'
        "export const View = () => <Default value={b} />;\n",
    )

    analysis = analyze_imports(src / "feature-a")

    assert [f.bindings for f in analysis.findings] == [("default as Default", "a as b")]


def test_scenario_unparseable_file_is_skipped(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    src = _make_src(tmp_path)
    _write(src / "feature-a" / "broken.ts", "import { from ;\n")
    _write(src / "feature-a" / "ok.ts", 'import { c } from "../feature-c/c";\n')

    with caplog.at_level(logging.WARNING):
        analysis = analyze_imports(src / "feature-a")

    assert [f.sibling_module for f in analysis.findings] == ["feature-c"]
    assert [d.path for d in analysis.diagnostics] == [
        os.path.join("feature-a", "broken.ts")
    ]
    assert analysis.files_scanned == 2
    assert "Error parsing file" in caplog.text


def test_file_without_sibling_imports_has_no_findings(tmp_path: Path) -> None:
    src = _make_src(tmp_path)
    _write(
        src / "feature-a" / "x.ts",
        'import React from "react";\n'
        'import { local } from "./local";\n'
        'import { shared } from "../../lib/shared";\n',
    )

    analysis = analyze_imports(src / "feature-a")

    assert analysis.total == 0
    assert len(analysis.records) == 3
    assert not any(record.is_sibling for record in analysis.records)


def test_internal_import_named_like_nonmember_is_ignored(tmp_path: Path) -> None:
    src = _make_src(tmp_path)
    _write(
        src / "feature-a" / "x.ts",
        'import { thing } from "./sibling-module";\n',
    )

    assert analyze_imports(src / "feature-a").total == 0


def test_namespace_import_of_sibling(tmp_path: Path) -> None:
    src = tmp_path / "src"
    (src / "auth").mkdir(parents=True)
    _write(src / "profile" / "page.js", 'import * as auth from "../auth";\n')

    analysis = analyze_imports(src / "profile")

    assert [f.bindings for f in analysis.findings] == [("* as auth",)]
    assert analysis.finding_list()[0].sibling_module == "auth"


def test_duplicate_import_in_one_file_yields_one_finding(tmp_path: Path) -> None:
    src = _make_src(tmp_path)
    line = 'import { helper } from "../feature-b/helper";\n'
    _write(src / "feature-a" / "x.ts", line + line)
    _write(src / "feature-a" / "y.ts", line)

    analysis = analyze_imports(src / "feature-a")

    assert sorted(f.source_file for f in analysis.findings) == [
        os.path.join("feature-a", "x.ts"),
        os.path.join("feature-a", "y.ts"),
    ]


def test_analysis_is_idempotent(tmp_path: Path) -> None:
    src = _make_src(tmp_path)
    _write(
        src / "feature-a" / "x.ts",
        'import { b } from "../feature-b/b";\nimport c from "@app/feature-c/c";\n',
    )
    _write(
        src / "feature-a" / "nested" / "y.jsx",
        'import { b2 } from "../../feature-b/b2";\n',
    )

    first = analyze_imports(src / "feature-a")
    second = analyze_imports(src / "feature-a")

    assert first.finding_list() == second.finding_list()
    first_tree = first.to_report().model_dump(by_alias=True)["structure"]
    second_tree = second.to_report().model_dump(by_alias=True)["structure"]
    assert first_tree == second_tree


def test_explicit_scope_changes_sibling_set(tmp_path: Path) -> None:
    features = tmp_path / "app" / "features"
    (features / "cart").mkdir(parents=True)
    (tmp_path / "app" / "shared").mkdir(parents=True)
    _write(
        features / "auth" / "login.ts",
        'import { cart } from "../cart/store";\n'
        'import { shared } from "../../shared/util";\n',
    )

    analysis = analyze_imports(features / "auth", scope_dir=features)

    assert [f.sibling_module for f in analysis.findings] == ["cart"]
    assert analysis.finding_list()[0].source_file == os.path.join("auth", "login.ts")


def test_report_total_matches_findings(tmp_path: Path) -> None:
    src = _make_src(tmp_path)
    _write(src / "feature-a" / "x.ts", 'import { b } from "../feature-b/b";\n')

    report = analyze_imports(src / "feature-a").to_report()

    assert report.total_imports == 1
    assert report.target_directory == str(src / "feature-a")


def test_missing_target_raises(tmp_path: Path) -> None:
    with pytest.raises(DirectoryNotFoundError):
        analyze_imports(tmp_path / "missing")



def test_file_with_invalid_utf8_does_not_abort_the_run(tmp_path: Path) -> None:
    src = _make_src(tmp_path)
    (src / "feature-a" / "bad.ts").write_bytes(
        b'import x from "../feature-c/caf\xe9";\n'
    )
    _write(src / "feature-a" / "ok.ts", 'import { b } from "../feature-b/b";\n')

    analysis = analyze_imports(src / "feature-a")

    assert analysis.files_scanned == 2
    assert sorted(f.sibling_module for f in analysis.findings) == [
        "feature-b",
        "feature-c",
    ]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_symlinked_file_outside_target_is_analyzed(tmp_path: Path) -> None:
    src = _make_src(tmp_path)
    _write(tmp_path / "shared.ts", 'import { b } from "../feature-b/b";\n')
    (src / "feature-a" / "linked.ts").symlink_to(tmp_path / "shared.ts")

    analysis = analyze_imports(src / "feature-a")

    assert analysis.files_scanned == 1
    finding = analysis.finding_list()[0]
    assert finding.source_file == os.path.join("feature-a", "linked.ts")
    assert finding.sibling_module == "feature-b"


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_symlinked_file_is_not_analyzed_twice(tmp_path: Path) -> None:
    src = _make_src(tmp_path)
    _write(src / "feature-a" / "x.ts", 'import { b } from "../feature-b/b";\n')
    (src / "feature-a" / "alias.ts").symlink_to(src / "feature-a" / "x.ts")

    analysis = analyze_imports(src / "feature-a")

    assert analysis.files_scanned == 1
    assert analysis.total == 1
