from pathlib import Path

from src.jupiter_hr.jupiter_hr.database.bootstrap import (
    EXPECTED_TABLES,
    _strip_create_db_and_use,
    missing_tables,
    split_sql_statements,
)

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_split_ignores_semicolons_in_quotes_and_comments():
    sql = """
    -- a comment; with a semicolon
    CREATE TABLE a (x VARCHAR(10) DEFAULT 'a;b');
    INSERT INTO a VALUES ("it\\"s;fine");
    SELECT 1
    """
    stmts = list(split_sql_statements(sql))

    assert len(stmts) == 3
    assert stmts[0].startswith("CREATE TABLE a")
    assert "'a;b'" in stmts[0]
    assert stmts[2] == "SELECT 1"


def test_create_database_and_use_are_stripped():
    sql = "CREATE DATABASE IF NOT EXISTS foo;\nUSE foo;\nCREATE TABLE t (id INT);\n"
    assert list(split_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]


def test_schema_defines_every_table():
    script = _strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8"))
    created = {
        stmt.split("(")[0].split()[-1].strip("`")
        for stmt in split_sql_statements(script)
        if stmt.upper().startswith("CREATE TABLE")
    }
    assert set(EXPECTED_TABLES) <= created


def test_missing_tables_is_case_insensitive():
    assert missing_tables(["USERS", "students", "skills"]) == ["performances", "documents"]
    assert missing_tables(EXPECTED_TABLES) == []
