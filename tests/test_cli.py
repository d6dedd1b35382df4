"""Tests for depreport CLI entrypoints."""

from __future__ import annotations

import io
import json
import sys
from pathlib import Path

import pytest

import depreport.main as main

REPORT = (
    "------------------------------------------------------------\n"
    "Project ':app'\n"
    "------------------------------------------------------------\n\n"
    "api - API dependencies.\n"
    "+--- com.example:lib:1.0 -> 2.0\n"
    "|    \\--- com.example:core:2.0\n"
    "\\--- com.example:util:3.1\n\n"
)

LEGEND = (
    "(*) - dependencies omitted (listed previously)\n\n"
    "A web-based, searchable dependency report is available by adding the --scan option.\n\n"
    "BUILD SUCCESSFUL in 1s\n"
)

UNKNOWN_BLOCK = "mystery - Custom bucket\n\\--- com.example:odd:1.0\n\n"


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)


def _write_report(tmp_path: Path, text: str = REPORT) -> Path:
    path = tmp_path / "dependencies.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_parse_prints_projects_to_stdout(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Default format nests non-repeated entries under each project."""
    exit_code = main.main(["parse", str(_write_report(tmp_path))])

    assert exit_code == 0
    (project,) = json.loads(capsys.readouterr().out)
    assert project["name"] == "app"
    assert [d["name"] for d in project["dependencies"]] == [
        "com.example:lib",
        "com.example:util",
    ]


def test_parse_writes_records_to_output_file(tmp_path: Path) -> None:
    output = tmp_path / "out" / "records.json"

    exit_code = main.main(
        ["parse", str(_write_report(tmp_path)), "--format", "records", "-o", str(output)]
    )

    assert exit_code == 0
    records = json.loads(output.read_text(encoding="utf-8"))
    assert [r["is_repeat"] for r in records] == [False, True, False]
    assert records[0]["resolved_version"] == "2.0"


def test_parse_graph_format(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main.main(["parse", str(_write_report(tmp_path)), "--format", "graph"])

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert "project:app" in {node["id"] for node in data["nodes"]}
    assert len(data["edges"]) == 3


def test_parse_reads_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO(REPORT))

    exit_code = main.main(["parse", "-"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)[0]["name"] == "app"


def test_report_with_legend_and_footer_exits_with_zero(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = _write_report(tmp_path, REPORT + LEGEND)

    assert main.main(["parse", str(path)]) == 0
    assert json.loads(capsys.readouterr().out)[0]["name"] == "app"


def test_grammar_error_exits_with_one(tmp_path: Path) -> None:
    path = _write_report(tmp_path, REPORT + UNKNOWN_BLOCK)
    assert main.main(["parse", str(path)]) == 1


def test_lenient_flag_accepts_unknown_configurations(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    path = _write_report(tmp_path, REPORT + UNKNOWN_BLOCK + LEGEND)

    exit_code = main.main(["parse", str(path), "--lenient"])

    assert exit_code == 0
    (project,) = json.loads(capsys.readouterr().out)
    assert project["configurations"] == ["api", "mystery"]


def test_config_option_extends_vocabulary(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    report = _write_report(
        tmp_path, "Project ':app'\n\nshadowJar\n\\--- com.example:lib:1.0\n"
    )
    config = tmp_path / "depreport.toml"
    config.write_text('[parser]\ndependency_types = ["shadowJar"]\n', encoding="utf-8")

    exit_code = main.main(["parse", str(report), "--config", str(config)])

    assert exit_code == 0
    (project,) = json.loads(capsys.readouterr().out)
    assert project["configurations"] == ["shadowJar"]


def test_missing_report_and_bad_config_exit_with_one(tmp_path: Path) -> None:
    assert main.main(["parse", str(tmp_path / "missing.txt")]) == 1
    report = _write_report(tmp_path)
    assert main.main(["parse", str(report), "--config", "strict = 1"]) == 1


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main.main([]) == 2
    assert "parse" in capsys.readouterr().out
