from __future__ import annotations

from pathlib import Path

from points_import.cli import main as cli_main

"""Exit code contract: 0 all clean, 2 rejected rows or failed files, 1 fatal."""


def test_exit_code_fatal_without_config(temp_workdir: Path, capsys):
    code = cli_main([])
    assert code == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_fatal_missing_source_directory(temp_workdir: Path, write_config: Path, capsys):
    text = write_config.read_text(encoding="utf-8").replace("./data", "./missing_dir")
    write_config.write_text(text, encoding="utf-8")
    code = cli_main([])
    assert code == 1
    assert "ERROR directory not found:" in capsys.readouterr().out


def test_exit_code_all_success(temp_workdir: Path, write_config, make_points_file, valid_row):
    make_points_file([valid_row], directory=temp_workdir / "data")
    assert cli_main([]) == 0


def test_exit_code_no_files_is_success(temp_workdir: Path, write_config, capsys):
    assert cli_main([]) == 0
    assert "SUMMARY files=0/0 success=0 failed=0 rows=0" in capsys.readouterr().out


def test_exit_code_rejected_rows(temp_workdir: Path, write_config, make_points_file, valid_row):
    bad = list(valid_row)
    bad[2] = None
    make_points_file([valid_row, bad], directory=temp_workdir / "data")
    assert cli_main([]) == 2


def test_exit_code_failed_file(temp_workdir: Path, write_config, make_points_file, valid_row):
    make_points_file([valid_row], directory=temp_workdir / "data", name="a.xlsx")
    (temp_workdir / "data" / "b.xlsx").write_text("not a workbook", encoding="utf-8")
    assert cli_main([]) == 2
