import sqlite3

import pytest

from towerdefence.resultset import (
    ResultSet,
    SqlError,
    decode_user_date,
    execute_sql,
    parse_user_date,
)
from towerdefence.timestamp import Timestamp


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def populated(connection):
    execute_sql(
        connection,
        "CREATE TABLE maps (id INTEGER PRIMARY KEY, name TEXT);"
        "INSERT INTO maps(id, name) VALUES(1, 'Pondside path');"
        "INSERT INTO maps(id, name) VALUES(2, 'Crescent cliff');",
    )
    return connection


def test_select_rows_and_columns(populated):
    result = execute_sql(populated, "SELECT id, name FROM maps ORDER BY id;")
    assert result.row_count() == 2
    assert result.column_name(0) == "id"
    assert result.column_name(1) == "name"
    assert result.integer(1, 0) == 2
    assert result.text(0, 1) == "Pondside path"


def test_multiple_statements_create_tables(connection):
    execute_sql(
        connection,
        """
        CREATE TABLE IF NOT EXISTS game_progress (id INTEGER PRIMARY KEY, coins INTEGER DEFAULT 0);
        CREATE TABLE IF NOT EXISTS map_progress (map_id INTEGER PRIMARY KEY, max_wave INTEGER);
        """,
    )
    result = execute_sql(connection, "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name")
    assert [result.text(r, 0) for r in range(result.row_count())] == ["game_progress", "map_progress"]


def test_empty_result_has_no_columns(populated):
    result = execute_sql(populated, "SELECT id FROM maps WHERE id = 99;")
    assert result.row_count() == 0
    assert result.columns == []


def test_null_reads_as_empty_and_zero(connection):
    result = execute_sql(connection, "SELECT NULL;")
    assert result.text(0, 0) == ""
    assert result.integer(0, 0) == 0


def test_integer_takes_leading_number(connection):
    result = execute_sql(connection, "SELECT 1.5, '42abc', 'abc';")
    assert result.integer(0, 0) == 1
    assert result.integer(0, 1) == 42
    with pytest.raises(ValueError):
        result.integer(0, 2)


def test_bad_sql_raises(connection):
    with pytest.raises(SqlError):
        execute_sql(connection, "SELECT * FROM missing_table;")


def test_out_of_range_indexes(populated):
    result = execute_sql(populated, "SELECT id FROM maps;")
    with pytest.raises(IndexError):
        result.column_name(1)
    with pytest.raises(IndexError):
        result.text(5, 0)
    with pytest.raises(IndexError):
        result.text(0, -1)


def test_semicolon_inside_string(connection):
    execute_sql(connection, "CREATE TABLE t (v TEXT); INSERT INTO t VALUES('a;b');")
    result = execute_sql(connection, "SELECT v FROM t;")
    assert result.text(0, 0) == "a;b"


def test_changes_are_committed(tmp_path):
    path = tmp_path / "progress.sqlite"
    writer = sqlite3.connect(path)
    execute_sql(writer, "CREATE TABLE t (v INTEGER); INSERT INTO t VALUES(7);")
    reader = sqlite3.connect(path)
    try:
        assert execute_sql(reader, "SELECT v FROM t").integer(0, 0) == 7
    finally:
        reader.close()
        writer.close()


def test_blob_round_trip(connection):
    result = execute_sql(connection, "SELECT X'00FF41';")
    assert result.blob(0, 0) == b"\x00\xffA"


def test_timestamp_column(connection):
    result = execute_sql(connection, "SELECT '2024-03-05 10:11:12', 'NULL', NULL, 'garbage';")
    assert result.timestamp(0, 0) == Timestamp.parse("2024-03-05 10:11:12", "YYYY-MM-DD HH:MM:SS")
    assert result.timestamp(0, 1) is None
    assert result.timestamp(0, 2) is None
    with pytest.raises(ValueError):
        result.timestamp(0, 3)


def test_result_set_built_directly():
    result = ResultSet(columns=["a"], rows=[("5",)])
    assert result.integer(0, 0) == 5
    assert result.row_count() == 1


def test_parse_user_date():
    assert parse_user_date("05-MAR-2024") == Timestamp.parse("05-MAR-2024", "DD-MON-YYYY")
    assert parse_user_date("2024-03-05") is None
    assert parse_user_date("31-FEB-2024") is None


def test_decode_user_date():
    assert decode_user_date("05-mar-2024") == (2024, 3, 5)
    assert decode_user_date("31-FEB-2024") == (2024, 2, 31)


@pytest.mark.parametrize(
    "text", ["05-MAR-1899", "05-MAR-2501", "00-MAR-2024", "32-MAR-2024", "05-XYZ-2024", "05/03/2024", "05"]
)
def test_decode_user_date_rejects(text):
    assert decode_user_date(text) is None