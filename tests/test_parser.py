import pytest

from sqlindexer.parser import CHUNK_SIZE, parse_sql, parse_sql_file

BASIC = b"CREATE TABLE users (\n  id INT NOT NULL,\n  name VARCHAR(20)\n);\n"


def test_basic_table():
    index = parse_sql(BASIC)
    assert len(index) == 1
    entry = index.entries[0]
    assert entry.type == "TABLE"
    assert entry.name == "users"
    assert entry.line_number == 1
    assert entry.table_info.end_offset == BASIC.index(b");") + 1
    assert [c.name for c in entry.table_info.columns] == ["id", "name"]
    assert entry.table_info.columns[0].is_not_null


def test_backticks_and_lowercase_keyword():
    data = b"-- header\n\ncreate table `a` (x INT);\nCREATE TABLE b (y INT);\n"
    index = parse_sql(data)
    assert [e.name for e in index] == ["a", "b"]
    assert [e.line_number for e in index] == [3, 4]


def test_str_input_matches_bytes():
    from_str = parse_sql(BASIC.decode())
    from_bytes = parse_sql(BASIC)
    assert from_str == from_bytes


def test_table_without_body():
    data = b"CREATE TABLE t\n"
    index = parse_sql(data)
    info = index.entries[0].table_info
    assert index.entries[0].name == "t"
    assert info.end_offset == data.index(b"\n")
    assert info.columns == []


def test_unbalanced_body():
    data = b"CREATE TABLE t (a INT"
    info = parse_sql(data).entries[0].table_info
    assert info.end_offset == data.index(b"(") + 1
    assert info.columns == []


@pytest.mark.parametrize(
    "data", [b"", b"CREATE TABLEX foo (a INT)", b"CREATE TABLE", b"SELECT 1;"]
)
def test_nothing_indexed(data):
    assert len(parse_sql(data)) == 0


def test_table_in_second_chunk():
    data = b" " * CHUNK_SIZE + b"CREATE TABLE t (a INT);"
    index = parse_sql(data)
    assert [e.name for e in index] == ["t"]
    assert index.entries[0].table_info.end_offset == data.index(b")") + 1


def test_keyword_split_across_chunks_is_missed():
    data = b" " * (CHUNK_SIZE - 5) + b"CREATE TABLE t (a INT);"
    assert len(parse_sql(data)) == 0


def test_parse_file_matches_parse_sql(tmp_path):
    data = BASIC + b"CREATE TABLE `orders` (\n  `id` INT PRIMARY KEY\n);\n"
    path = tmp_path / "dump.sql"
    path.write_bytes(data)
    assert parse_sql_file(path) == parse_sql(data)
    assert [e.name for e in parse_sql_file(path)] == ["users", "orders"]


def test_parse_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_sql_file(tmp_path / "missing.sql")