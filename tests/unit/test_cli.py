# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for the scan CLI harness."""

import csv
import io
import json
from pathlib import Path

import pytest

from cli.callscan_cli import run


def _run(argv: list[str], stdin: io.StringIO | None = None) -> tuple[int, str, str]:
    stdout = io.StringIO()
    stderr = io.StringIO()
    exit_code = run(argv, stdout=stdout, stderr=stderr, stdin=stdin)
    return exit_code, stdout.getvalue(), stderr.getvalue()


def test_cli_writes_csv_for_java_files(java_project: Path, tmp_path: Path) -> None:
    output_path = tmp_path / "function_calls.csv"

    exit_code, stdout, stderr = _run(
        ["--path", str(java_project), "--output", str(output_path), "--workers", "2"]
    )

    assert exit_code == 0
    assert stderr == ""
    assert (
        f"Processed 3 function calls with 2 workers. Output written to {output_path}"
        in stdout
    )
    with output_path.open(encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))
    assert rows[0] == ["Filename", "Function Call", "Argument", "Tag", "Identifier"]
    assert rows[1] == [
        "A.java",
        'myFunction("Alpha first value");',
        "Alpha first value",
        "Alpha",
        "first value",
    ]
    assert rows[2][2] == "Beta second, value"
    assert [row[3] for row in rows[1:]] == ["Alpha", "Beta", "Gamma"]


def test_cli_prompts_for_directory_when_path_is_omitted(
    java_project: Path, tmp_path: Path
) -> None:
    output_path = tmp_path / "out.csv"

    exit_code, stdout, _ = _run(
        ["--output", str(output_path), "--workers", "1"],
        stdin=io.StringIO(f"{java_project}\n"),
    )

    assert exit_code == 0
    assert "Enter directory path containing .java files" in stdout
    assert output_path.exists()


def test_cli_honors_extension_and_marker_options(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    project_root.mkdir()
    (project_root / "app.kt").write_text(
        'logEvent("Audit user login");\nmyFunction("Alpha skipped");\n',
        encoding="utf-8",
    )
    output_path = tmp_path / "out.csv"

    exit_code, _, _ = _run(
        [
            "--path",
            str(project_root),
            "--output",
            str(output_path),
            "--extension",
            "kt",
            "--marker",
            "logEvent",
        ]
    )

    assert exit_code == 0
    lines = output_path.read_text(encoding="utf-8").splitlines()
    assert lines[1:] == ['app.kt,"logEvent(""Audit user login"");",Audit user login,Audit,user login']


def test_cli_writes_json_when_requested(java_project: Path, tmp_path: Path) -> None:
    output_path = tmp_path / "calls.json"

    exit_code, _, _ = _run(
        ["--path", str(java_project), "--output", str(output_path), "--format", "json"]
    )

    assert exit_code == 0
    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert [record["tag"] for record in payload["records"]] == ["Alpha", "Beta", "Gamma"]
    assert payload["errors"] == []


def test_cli_preview_renders_records(java_project: Path, tmp_path: Path) -> None:
    exit_code, stdout, _ = _run(
        [
            "--path",
            str(java_project),
            "--output",
            str(tmp_path / "out.csv"),
            "--preview",
        ]
    )

    assert exit_code == 0
    assert "Gamma" in stdout
    assert "Identifier" in stdout


def test_cli_reports_unreadable_file_and_continues(
    java_project: Path, tmp_path: Path
) -> None:
    (java_project / "Broken.java").symlink_to(tmp_path / "missing-target.java")
    output_path = tmp_path / "out.csv"

    exit_code, stdout, stderr = _run(
        ["--path", str(java_project), "--output", str(output_path)]
    )

    assert exit_code == 0
    assert "scan_error: Unable to open file:" in stderr
    assert "Broken.java" in stderr
    assert "Processed 3 function calls" in stdout


def test_cli_fails_when_directory_is_missing(tmp_path: Path) -> None:
    exit_code, _, stderr = _run(
        ["--path", str(tmp_path / "missing"), "--output", str(tmp_path / "out.csv")]
    )

    assert exit_code == 2
    assert "Directory does not exist" in stderr


def test_cli_fails_when_output_cannot_be_created(
    java_project: Path, tmp_path: Path
) -> None:
    exit_code, _, stderr = _run(["--path", str(java_project), "--output", str(tmp_path)])

    assert exit_code == 2
    assert "Unable to create output CSV file" in stderr


def test_cli_rejects_invalid_worker_count(java_project: Path) -> None:
    exit_code, _, stderr = _run(["--path", str(java_project), "--workers", "0"])

    assert exit_code == 2
    assert "workers must be > 0" in stderr


def test_cli_rejects_invalid_window_size(java_project: Path) -> None:
    exit_code, _, stderr = _run(["--path", str(java_project), "--window-size", "0"])

    assert exit_code == 2
    assert "Invalid matcher configuration" in stderr


def test_cli_returns_error_code_for_unparseable_arguments() -> None:
    exit_code, _, _ = _run(["--workers", "many"])

    assert exit_code == 2


def test_cli_rejects_blank_directory_answer(
    java_project: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(java_project)
    output_path = tmp_path / "out.csv"

    for answer in ("", "   \n"):
        exit_code, _, stderr = _run(
            ["--output", str(output_path)], stdin=io.StringIO(answer)
        )

        assert exit_code == 2
        assert "Directory path must not be empty" in stderr
    assert not output_path.exists()
