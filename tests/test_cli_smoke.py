"""Smoke tests for the CLI entry point."""
from __future__ import annotations

import json
import zipfile

import pytest

from lead_batcher import __main__
from lead_batcher.cli import main


def _write_input(tmp_path):
    input_path = tmp_path / "input.csv"
    input_path.write_text(
        "ContactName,Phone2\nJane Doe,9876543210\nJohn Roe,7876543210\nNo Phone,\n",
        encoding="utf-8",
    )
    return input_path


def test_cli_smoke_writes_archive_and_prints_summary(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = _write_input(tmp_path)
    output_dir = tmp_path / "outputs"

    exit_code = main([str(input_path), "--output-dir", str(output_dir), "--batch-size", "1"])

    assert exit_code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["stats"] == {"total_rows": 3, "valid": 2, "rejected": 1, "chunks": 2}
    with zipfile.ZipFile(summary["archive"]) as bundle:
        assert bundle.namelist() == ["output_1.xlsx", "output_2.xlsx", "rejected.json"]


def test_cli_reads_settings_from_config(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = _write_input(tmp_path)
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps({"batch_size": 5, "output_dir": str(tmp_path / "configured"), "sheet_format": "csv"}),
        encoding="utf-8",
    )

    exit_code = main([str(input_path), "--config", str(config_path)])

    assert exit_code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["archive"].startswith(str(tmp_path / "configured"))
    with zipfile.ZipFile(summary["archive"]) as bundle:
        assert bundle.namelist() == ["output_1.csv", "rejected.json"]


def test_cli_reports_fatal_errors(tmp_path) -> None:
    bad_input = tmp_path / "input.json"
    bad_input.write_text("{}", encoding="utf-8")

    assert main([str(bad_input), "--output-dir", str(tmp_path)]) == 1


def test_module_entry_point_delegates_to_cli(tmp_path) -> None:
    """The package entry point should behave like the CLI."""

    input_path = _write_input(tmp_path)

    exit_code = __main__.main([str(input_path), "--output-dir", str(tmp_path / "outputs")])

    assert exit_code == 0
    assert list((tmp_path / "outputs").glob("processed_leads_*.zip"))


def test_module_entry_point_without_arguments_shows_help(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = __main__.main([])

    captured = capsys.readouterr()
    assert "python -m lead_batcher" in captured.out
    assert exit_code == 2


def test_cli_handles_control_characters_in_names(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = tmp_path / "input.csv"
    input_path.write_text("ContactName,Phone2\nAsha\x01,9876543210\n", encoding="utf-8")

    exit_code = main([str(input_path), "--output-dir", str(tmp_path / "outputs")])

    assert exit_code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["stats"]["valid"] == 1
    with zipfile.ZipFile(summary["archive"]) as bundle:
        assert bundle.namelist() == ["output_1.xlsx"]


def test_module_entry_point_reports_usage_errors_with_module_prog(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        __main__.main(["input.csv", "--sheet-format", "ods"])

    assert excinfo.value.code == 2
    assert "python -m lead_batcher" in capsys.readouterr().err
