from src.mac_attendance.mac_attendance.database.bootstrap import split_sql_statements


def test_split_ignores_semicolons_in_quotes_and_comments():
    sql = """
    -- header; not a statement
    CREATE TABLE a (x INT);
    INSERT INTO a VALUES ('x;y');
    INSERT INTO a VALUES ("it\\'s;")
    """

    stmts = list(split_sql_statements(sql))

    assert stmts == [
        "CREATE TABLE a (x INT)",
        "INSERT INTO a VALUES ('x;y')",
        "INSERT INTO a VALUES (\"it\\'s;\")",
    ]


def test_split_empty_script():
    assert list(split_sql_statements("  ;; \n")) == []


def test_schema_ships_next_to_bootstrap_module():
    from src.mac_attendance.mac_attendance.database import bootstrap

    assert bootstrap.SCHEMA_PATH.is_file()
    assert bootstrap.SEED_PATH.is_file()
    assert bootstrap.SCHEMA_PATH.parent == bootstrap.SQL_DIR

    stmts = list(split_sql_statements(bootstrap.SCHEMA_PATH.read_text(encoding="utf-8")))
    assert any("CREATE TABLE IF NOT EXISTS students" in s for s in stmts)
    assert any("CREATE TABLE IF NOT EXISTS attendance_events" in s for s in stmts)
