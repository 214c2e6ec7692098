import logging
import subprocess
import sys

import pytest

from sql_loader import __version__
from sql_loader.cli import build_parser, main
from sql_loader.db import DatabaseHandle, EmbeddedHandle
from sql_loader.settings import Settings


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _count(db_file, table):
    with EmbeddedHandle.open(str(db_file)) as handle:
        return handle.connection.exec_driver_sql(f"SELECT COUNT(*) FROM {table}").scalar()


def test_no_arguments_prints_help(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "usage: sql-loader" in out
    assert "load" in out


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_load_help_lists_connection_options(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["load", "--help"])
    assert exc_info.value.code == 0
    out = capsys.readouterr().out
    for flag in ("--type", "--host", "--port", "--database", "--user", "--password", "--file"):
        assert flag in out


def test_load_options_parse():
    args = build_parser().parse_args(
        ["load", "schema.sql", "-t", "postgres", "-h", "db", "-p", "6543", "-d", "app", "-u", "me", "-w", "pw"]
    )
    assert (args.db_type, args.host, args.port, args.database, args.user, args.password) == (
        "postgres", "db", 6543, "app", "me", "pw",
    )


def test_parser_defaults_come_from_settings():
    parser = build_parser(Settings(db_type="postgres", host="db.internal", port=6000))
    args = parser.parse_args(["load", "x.sql"])
    assert (args.db_type, args.host, args.port) == ("postgres", "db.internal", 6000)


def test_load_directory_into_sqlite_file(tmp_path, capsys):
    scripts = tmp_path / "scripts"
    scripts.mkdir()
    (scripts / "001_schema.sql").write_text("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT);")
    (scripts / "002_seed.sql").write_text("INSERT INTO users (name) VALUES ('a'); INSERT INTO users (name) VALUES ('b');")
    db_file = tmp_path / "app.db"

    assert main(["load", str(scripts), "-f", str(db_file)]) == 0

    out = capsys.readouterr().out
    assert f"Opening SQLite database: {db_file}" in out
    assert "Found 2 SQL file(s)" in out
    assert "✓ All SQL files loaded successfully" in out
    assert _count(db_file, "users") == 2


def test_load_single_file_with_url(tmp_path, capsys):
    script = tmp_path / "schema.sql"
    script.write_text("CREATE TABLE t (id INTEGER);")
    db_file = tmp_path / "url.db"

    assert main(["load", str(script), "--url", f"sqlite:///{db_file}"]) == 0
    assert _count(db_file, "t") == 0


def test_missing_path_exits_nonzero(tmp_path, capsys):
    assert main(["load", str(tmp_path / "missing.sql")]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: Path not found:")
    assert len(err.strip().splitlines()) == 1


def test_unsupported_type_exits_nonzero(tmp_path, capsys):
    script = tmp_path / "schema.sql"
    script.write_text("SELECT 1;")

    assert main(["load", str(script), "-t", "oracle"]) == 1
    assert "Error: Unsupported database type: oracle" in capsys.readouterr().err


def test_invalid_sql_exits_nonzero(tmp_path, capsys):
    script = tmp_path / "invalid.sql"
    script.write_text("INVALID SQL STATEMENT;")

    assert main(["load", str(script)]) == 1
    err = capsys.readouterr().err
    assert "Error: Error executing statement #1" in err
    assert "invalid.sql" in err


def test_module_entry_point_help():
    proc = subprocess.run(
        [sys.executable, "-m", "sql_loader", "--help"],
        capture_output=True,
        text=True,
        check=True,
    )
    assert "sql-loader" in proc.stdout
    assert "load" in proc.stdout


def test_handle_closed_after_failure(tmp_path, capsys, monkeypatch):
    closed = []
    original_close = DatabaseHandle.close

    def _close(self):
        closed.append(self)
        original_close(self)

    monkeypatch.setattr(DatabaseHandle, "close", _close)
    script = tmp_path / "bad.sql"
    script.write_text("INVALID SQL STATEMENT;")

    assert main(["load", str(script)]) == 1
    assert len(closed) == 1
    assert closed[0].connection is None


def test_invalid_log_level_is_rejected(tmp_path, capsys):
    script = tmp_path / "schema.sql"
    script.write_text("SELECT 1;")

    with pytest.raises(SystemExit) as exc_info:
        main(["load", str(script), "--log-level", "foo"])

    assert exc_info.value.code == 2
    err = capsys.readouterr().err
    assert "--log-level" in err
    assert "foo" in err


def test_log_level_is_case_insensitive():
    args = build_parser().parse_args(["load", "x.sql", "--log-level", "DEBUG"])
    assert args.log_level == "debug"
