from __future__ import annotations

import json
from pathlib import Path

from points_import.cli import main as cli_main


def test_cli_run_logs_each_file_and_summary(temp_workdir: Path, write_config, make_points_file, valid_row, capsys):
    make_points_file([valid_row], directory=temp_workdir / "data", name="marco.xlsx")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO Processing 1 spreadsheet(s)" in out
    assert "INFO file=marco.xlsx total=1 valid=1 errors=0" in out
    assert "SUMMARY files=1/1 success=1 failed=0 rows=1 valid=1 errors=0" in out


def test_cli_writes_error_log(temp_workdir: Path, write_config, make_points_file, valid_row, capsys):
    bad = list(valid_row)
    bad[0] = "99/99/2024"
    make_points_file([bad], directory=temp_workdir / "data", name="marco.xlsx")
    assert cli_main([]) == 2
    logs = list((temp_workdir / "logs").glob("import-errors-*.log"))
    assert len(logs) == 1
    record = json.loads(logs[0].read_text(encoding="utf-8"))
    assert record["file"] == "marco.xlsx"
    assert record["row"] == 5
    assert record["error_type"] == "INVALID_DATE"
    assert "error log written to" in capsys.readouterr().out


def test_cli_no_error_log_when_clean(temp_workdir: Path, write_config, make_points_file, valid_row):
    make_points_file([valid_row], directory=temp_workdir / "data")
    assert cli_main([]) == 0
    assert not (temp_workdir / "logs").exists()


def test_cli_explicit_paths_without_config(temp_workdir: Path, make_points_file, valid_row, capsys):
    p = make_points_file([valid_row], directory=temp_workdir / "elsewhere")
    assert cli_main([str(p)]) == 0
    assert "SUMMARY files=1/1" in capsys.readouterr().out


def test_cli_config_from_environment(temp_workdir: Path, make_points_file, valid_row, monkeypatch):
    (temp_workdir / "outra").mkdir()
    cfg = temp_workdir / "outra.yml"
    cfg.write_text("source_directory: ./outra\n", encoding="utf-8")
    make_points_file([valid_row], directory=temp_workdir / "outra")
    monkeypatch.setenv("POINTS_IMPORT_CONFIG", str(cfg))
    assert cli_main([]) == 0


def test_cli_env_config_missing_is_fatal(temp_workdir: Path, make_points_file, valid_row, monkeypatch, capsys):
    p = make_points_file([valid_row], directory=temp_workdir / "data")
    monkeypatch.setenv("POINTS_IMPORT_CONFIG", str(temp_workdir / "nada.yml"))
    assert cli_main([str(p)]) == 1
    assert "ERROR config: config file not found" in capsys.readouterr().out


def test_cli_dotenv_sets_config_path(temp_workdir: Path, make_points_file, valid_row, monkeypatch):
    (temp_workdir / "dotenv_data").mkdir()
    cfg = temp_workdir / "dotenv.yml"
    cfg.write_text("source_directory: ./dotenv_data\n", encoding="utf-8")
    make_points_file([valid_row], directory=temp_workdir / "dotenv_data")
    (temp_workdir / ".env").write_text(f"POINTS_IMPORT_CONFIG={cfg}\n", encoding="utf-8")
    # registered so the value written by .env is undone after the test
    monkeypatch.setenv("POINTS_IMPORT_CONFIG", str(temp_workdir / "overridden.yml"))
    assert cli_main([]) == 0


def test_cli_json_dir(temp_workdir: Path, write_config, make_points_file, valid_row):
    make_points_file([valid_row], directory=temp_workdir / "data", name="marco.xlsx")
    assert cli_main(["--json-dir", "out"]) == 0
    payload = json.loads((temp_workdir / "out" / "marco.result.json").read_text(encoding="utf-8"))
    assert payload["totalRows"] == 1
    assert payload["rows"][0]["data"]["saleDate"] == "2024-03-15"


def test_cli_debug_mode(temp_workdir: Path, write_config, capsys):
    assert cli_main(["--debug"]) == 0
    assert "DEBUG debug mode enabled" in capsys.readouterr().out


def test_cli_inspect_data(temp_workdir: Path, write_config, make_points_file, valid_row, capsys):
    make_points_file([valid_row], directory=temp_workdir / "data", name="marco.xlsx")
    code = cli_main(["--inspect-data"])
    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: marco.xlsx" in out
    assert "HEADER: row=4" in out
    assert "'cnpj': 2" in out
    assert "SUMMARY" not in out


def test_cli_failed_file_is_logged(temp_workdir: Path, write_config, capsys):
    (temp_workdir / "data" / "quebrado.xlsx").write_text("not a workbook", encoding="utf-8")
    assert cli_main([]) == 2
    out = capsys.readouterr().out
    assert "ERROR failed to process spreadsheet quebrado.xlsx" in out
    assert "SUMMARY files=1/1 success=0 failed=1" in out
    record = json.loads(next((temp_workdir / "logs").glob("*.log")).read_text(encoding="utf-8"))
    assert record["row"] == -1
