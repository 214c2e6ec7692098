# sql_loader/cli.py
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .db import open_handle
from .errors import SqlLoaderError
from .loader import load_path
from .settings import Settings, settings

logger = logging.getLogger(__name__)

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


def build_parser(defaults: Settings = settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sql-loader",
        description="A lean CLI utility for loading SQL scripts",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", metavar="<command>")

    # -h 는 --host 로 쓰므로 도움말은 --help 만
    load_cmd = sub.add_parser(
        "load",
        help="Load SQL file(s) into a database",
        description="Load SQL file(s) into a database",
        add_help=False,
    )
    load_cmd.add_argument("--help", action="help", help="show this help message and exit")
    load_cmd.add_argument("path", help="Path to SQL file or directory")
    load_cmd.add_argument("-t", "--type", dest="db_type", default=defaults.db_type,
                          help="Database type (postgres|sqlite)")
    load_cmd.add_argument("-h", "--host", default=defaults.host, help="Database host (for PostgreSQL)")
    load_cmd.add_argument("-p", "--port", type=int, default=defaults.port, help="Database port (for PostgreSQL)")
    load_cmd.add_argument("-d", "--database", default=defaults.database, help="Database name")
    load_cmd.add_argument("-u", "--user", default=defaults.user, help="Database user (for PostgreSQL)")
    load_cmd.add_argument("-w", "--password", default=defaults.password, help="Database password (for PostgreSQL)")
    load_cmd.add_argument("-f", "--file", dest="sqlite_file", default=defaults.sqlite_file,
                          help="SQLite database file")
    load_cmd.add_argument("--url", dest="database_url", default=defaults.database_url,
                          help="SQLAlchemy database URL (overrides the options above)")
    load_cmd.add_argument("--log-level", type=str.lower, choices=LOG_LEVELS, default=defaults.log_level,
                          help="Logging level (default: %(default)s)")
    return parser


def _first_line(exc: Exception) -> str:
    # SQLAlchemy 예외는 "(Background on this error at: ...)" 줄이 붙음
    lines = str(exc).strip().splitlines()
    return lines[0] if lines else exc.__class__.__name__


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        stream=sys.stdout,
        force=True,
    )


def load(args: argparse.Namespace) -> int:
    config = Settings(
        db_type=args.db_type,
        host=args.host,
        port=args.port,
        database=args.database,
        user=args.user,
        password=args.password,
        sqlite_file=args.sqlite_file,
        database_url=args.database_url,
        log_level=args.log_level,
    )
    target = Path(args.path).resolve()

    handle = None
    try:
        handle = open_handle(config)
        result = load_path(handle, target)
    except (SqlLoaderError, SQLAlchemyError) as e:
        print(f"Error: {_first_line(e)}", file=sys.stderr)
        return 1
    finally:
        if handle is not None:
            handle.close()

    logger.debug("files=%d statements=%d skipped=%d", result.files, result.statements, result.skipped)
    print("✓ All SQL files loaded successfully")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.log_level)
    return load(args)


def run():
    sys.exit(main())
