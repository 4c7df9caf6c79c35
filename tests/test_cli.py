from pathlib import Path

import pytest

from sqlindexer.cli import format_usage, main
from sqlindexer.indexfile import read_index

SQL = (
    "CREATE TABLE `users` (\n"
    "  id INT NOT NULL,\n"
    "  name VARCHAR(20)\n"
    ");\n"
    "INSERT INTO `users` VALUES (1,'alice');\n"
)


@pytest.fixture
def sql_file(tmp_path: Path) -> Path:
    path = tmp_path / "dump.sql"
    path.write_text(SQL)
    return path


def test_format_usage_names_program():
    text = format_usage("prog")
    assert text.startswith("Usage: prog [-v] <sql_file>\n")
    assert "<sql_file>.index" in text


def test_missing_file_argument(capsys):
    assert main([]) == 1
    err = capsys.readouterr().err
    assert "Error: SQL file path is required." in err
    assert "Usage:" in err


def test_unknown_option(capsys):
    assert main(["-x"]) == 1
    assert "Error: Unknown option '-x'" in capsys.readouterr().err


def test_multiple_files(capsys):
    assert main(["a.sql", "b.sql"]) == 1
    assert "Multiple SQL files specified ('a.sql' and 'b.sql')" in capsys.readouterr().err


def test_nonexistent_sql_file(tmp_path, capsys):
    missing = tmp_path / "nope.sql"
    assert main([str(missing)]) == 1
    assert "Error initializing context" in capsys.readouterr().err
    assert not (tmp_path / "nope.sql.index").exists()


def test_parse_writes_index_and_prints(sql_file, capsys):
    assert main([str(sql_file)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Indexed Objects:\n")
    assert "users" in out
    index_path = Path(str(sql_file) + ".index")
    assert index_path.exists()
    loaded = read_index(index_path)
    assert [e.name for e in loaded] == ["users"]
    assert [c.name for c in loaded.entries[0].table_info.columns] == ["id", "name"]


def test_sample_row_is_printed(sql_file, capsys):
    assert main([str(sql_file)]) == 0
    out = capsys.readouterr().out
    assert "--- Sample First Row for users (Offset: " in out
    assert "1,'alice'\n" in out


def test_second_run_loads_index(sql_file, capsys):
    assert main([str(sql_file)]) == 0
    first = capsys.readouterr().out
    assert main([str(sql_file)]) == 0
    second = capsys.readouterr().out
    assert "Successfully loaded 1 entries" in second
    assert second.endswith(first)


def test_bad_index_file_fails(tmp_path, capsys):
    sql = tmp_path / "x.sql"
    sql.write_text(SQL)
    (tmp_path / "x.sql.index").write_text("INDEX,foo,1\nCOLUMN,foo,a,INT,0,0,0,\n")
    assert main([str(sql)]) == 1
    assert "Error loading index file" in capsys.readouterr().err


def test_verbose_emits_debug(sql_file, capsys):
    assert main(["-v", str(sql_file)]) == 0
    err = capsys.readouterr().err
    assert "[DEBUG]" in err
    assert "Verbose mode enabled." in err


def test_quiet_emits_no_debug(sql_file, capsys):
    assert main([str(sql_file)]) == 0
    assert "[DEBUG]" not in capsys.readouterr().err


def test_empty_sql_reports_no_objects(tmp_path, capsys):
    sql = tmp_path / "empty.sql"
    sql.write_text("SELECT 1;\n")
    assert main([str(sql)]) == 0
    out = capsys.readouterr().out
    assert "No indexable objects found or index is empty." in out
    assert "Sample First Row" not in out