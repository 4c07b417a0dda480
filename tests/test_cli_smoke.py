from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from cli import main

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _make_project(root: Path) -> Path:
    src = root / "src"
    _write(
        src / "feature-a" / "x.ts",
        'import { helper } from "../feature-b/helper";\n',
    )
    _write(src / "feature-b" / "helper.ts", "export const helper = 1;\n")
    _write(src / "feature-c" / "Card.tsx", "export const Card = () => <div />;\n")
    _write(src / "feature-c" / "List.tsx", "export const List = () => <ul />;\n")
    return src


def test_cli_check_writes_report_and_prints_findings(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _make_project(tmp_path)
    out_dir = tmp_path / "reports"

    exit_code = main(["check", str(src / "feature-a"), "--out-dir", str(out_dir)])

    assert exit_code == 0
    report = json.loads((out_dir / "import-analysis.json").read_text("utf-8"))
    assert report["totalImports"] == 1
    captured = capsys.readouterr()
    assert "imports from sibling directory 'feature-b'" in captured.out


def test_cli_check_fail_on_findings(tmp_path: Path) -> None:
    src = _make_project(tmp_path)
    out_dir = tmp_path / "reports"

    assert (
        main(
            [
                "check",
                str(src / "feature-a"),
                "--out-dir",
                str(out_dir),
                "--fail-on-findings",
            ]
        )
        == 1
    )
    assert (
        main(
            [
                "check",
                str(src / "feature-b"),
                "--out-dir",
                str(out_dir),
                "--fail-on-findings",
            ]
        )
        == 0
    )


def test_cli_check_default_output_dir_from_config(tmp_path: Path) -> None:
    src = _make_project(tmp_path)
    (tmp_path / "boundarymap.toml").write_text(
        'output_dir = "out"\n', encoding="utf-8"
    )

    exit_code = main(
        ["--project-root", str(tmp_path), "check", str(src / "feature-a")]
    )

    assert exit_code == 0
    assert (tmp_path / "out" / "import-analysis.json").is_file()


def test_cli_check_missing_directory_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    missing = tmp_path / "missing"

    exit_code = main(
        ["check", str(missing), "--out-dir", str(tmp_path / "reports")]
    )

    assert exit_code == 2
    err = capsys.readouterr().err
    assert "Directory not found" in err
    assert "missing" in err


def test_cli_invalid_config_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _make_project(tmp_path)
    (tmp_path / "boundarymap.toml").write_text("bogus = 1\n", encoding="utf-8")

    exit_code = main(
        ["--project-root", str(tmp_path), "check", str(src / "feature-a")]
    )

    assert exit_code == 2
    assert "Invalid config" in capsys.readouterr().err


def test_cli_check_siblings_writes_index(tmp_path: Path) -> None:
    src = _make_project(tmp_path)
    out_dir = tmp_path / "reports"

    exit_code = main(["check-siblings", str(src), "--out-dir", str(out_dir)])

    assert exit_code == 0
    batch_dir = out_dir / "import-analysis-src"
    index = json.loads((batch_dir / "index.json").read_text("utf-8"))
    assert {entry["directory"]: entry["importCount"] for entry in index["reports"]} == {
        "feature-a": 1,
        "feature-b": 0,
        "feature-c": 0,
    }
    assert (batch_dir / "feature-a" / "import-analysis.json").is_file()


def test_cli_validate_generated_siblings_index(tmp_path: Path) -> None:
    src = _make_project(tmp_path)
    out_dir = tmp_path / "reports"
    main(["check-siblings", str(src), "--out-dir", str(out_dir)])

    index_path = out_dir / "import-analysis-src" / "index.json"
    assert main(["validate", str(index_path)]) == 0


def test_cli_structure_exits_nonzero_on_violations(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _make_project(tmp_path)
    out_dir = tmp_path / "reports"

    exit_code = main(["structure", str(src), "--out-dir", str(out_dir)])

    assert exit_code == 1
    assert "Card.tsx, List.tsx" in capsys.readouterr().out
    report_path = out_dir / "structure-analysis-src" / "structure-analysis.json"
    assert report_path.is_file()

    exit_code = main(
        ["structure", str(src), "--skip", "feature-c", "--out-dir", str(out_dir)]
    )
    assert exit_code == 0


def test_cli_validate_reports_missing_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    report_path = tmp_path / "import-analysis.json"

    exit_code = main(["validate", str(report_path)])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert f"{report_path.resolve()}:" in captured.err
    assert "Report file does not exist." in captured.err


def test_cli_validate_generated_report(tmp_path: Path) -> None:
    src = _make_project(tmp_path)
    out_dir = tmp_path / "reports"
    main(["check", str(src / "feature-a"), "--out-dir", str(out_dir)])

    assert main(["validate", str(out_dir / "import-analysis.json")]) == 0


def test_cli_verify_missing_report(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _make_project(tmp_path)
    report_path = tmp_path / "missing.json"

    exit_code = main(
        ["verify", str(src / "feature-a"), "--report", str(report_path)]
    )

    assert exit_code == 2
    captured = capsys.readouterr()
    assert f"report: {report_path.resolve()}" in captured.err
    assert "does not exist" in captured.err


def test_cli_verify_detects_drift(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    src = _make_project(tmp_path)
    out_dir = tmp_path / "reports"
    main(["check", str(src / "feature-a"), "--out-dir", str(out_dir)])
    report_path = out_dir / "import-analysis.json"

    assert main(["verify", str(src / "feature-a"), "--report", str(report_path)]) == 0

    _write(src / "feature-a" / "y.ts", 'import { c } from "../feature-c/Card";\n')
    capsys.readouterr()

    exit_code = main(["verify", str(src / "feature-a"), "--report", str(report_path)])

    assert exit_code == 1
    assert "extra:" in capsys.readouterr().err
