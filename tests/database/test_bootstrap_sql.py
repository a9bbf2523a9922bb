from src.checkin_engine.checkin_engine.database.bootstrap import _strip_create_db_and_use, iter_sql_statements


def test_splits_statements_outside_quotes():
    sql = "INSERT INTO t VALUES('a;b');\nSELECT \"x;y\";\n  SELECT 1"
    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES('a;b')",
        'SELECT "x;y"',
        "SELECT 1",
    ]


def test_escaped_quote_does_not_end_string():
    sql = "INSERT INTO t VALUES('it\\'s; fine'); SELECT 2;"
    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES('it\\'s; fine')", "SELECT 2"]


def test_strips_create_database_and_use():
    sql = "CREATE DATABASE IF NOT EXISTS x;\nUSE x;\nCREATE TABLE a (id INT);"
    out = _strip_create_db_and_use(sql)
    assert "CREATE DATABASE" not in out
    assert "USE x" not in out
    assert list(iter_sql_statements(out)) == ["CREATE TABLE a (id INT)"]
