# sql_loader/loader.py
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Protocol, Union

from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from .errors import ExecutionError, NotFoundError, ReadError
from .utils.statements import split_statements

__all__ = ["LoadResult", "load_file", "load_directory", "load_path"]

logger = logging.getLogger(__name__)

SQL_SUFFIX = ".sql"


class StatementExecutor(Protocol):
    def execute(self, statement: str) -> None: ...


@dataclass
class LoadResult:
    files: int = 0  # 처리한 파일 수 (빈 파일 포함)
    statements: int = 0  # 실행한 문장 수
    skipped: int = 0  # 내용이 비어 건너뛴 파일 수

    def __add__(self, other: "LoadResult") -> "LoadResult":
        return LoadResult(
            files=self.files + other.files,
            statements=self.statements + other.statements,
            skipped=self.skipped + other.skipped,
        )


def _db_message(exc: SQLAlchemyError) -> str:
    # DBAPIError 는 SQL 원문까지 붙여 문자열화하므로 드라이버 메시지만 사용
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig).strip()
    return str(exc)


def load_file(handle: StatementExecutor, path: Union[str, Path]) -> LoadResult:
    """SQL 파일 하나를 읽어 ';' 단위로 나눈 뒤 순서대로 실행. 첫 실패에서 중단."""
    path = Path(path)
    try:
        sql = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise NotFoundError(path, kind="File") from None
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(path, str(e)) from e

    if not sql.strip():
        logger.warning("Skipping empty file: %s", path)
        return LoadResult(files=1, skipped=1)

    statements = split_statements(sql)
    for index, statement in enumerate(statements, start=1):
        try:
            handle.execute(statement)
        except SQLAlchemyError as e:
            raise ExecutionError(path, index, statement, _db_message(e)) from e

    logger.info("Loaded: %s", path)
    return LoadResult(files=1, statements=len(statements))


def find_sql_files(path: Union[str, Path]) -> List[Path]:
    """디렉터리 바로 아래의 *.sql 일반 파일만, 파일명 오름차순. 하위 디렉터리는 보지 않음."""
    path = Path(path)
    try:
        entries = list(path.iterdir())
    except FileNotFoundError:
        raise NotFoundError(path, kind="Directory") from None
    except OSError as e:
        raise ReadError(path, str(e)) from e

    sql_files = [p for p in entries if p.name.endswith(SQL_SUFFIX) and p.is_file()]
    return sorted(sql_files, key=lambda p: p.name)


def load_directory(handle: StatementExecutor, path: Union[str, Path]) -> LoadResult:
    path = Path(path)
    sql_files = find_sql_files(path)

    if not sql_files:
        logger.warning("No SQL files found in directory: %s", path)
        return LoadResult()

    logger.info("Found %d SQL file(s) in %s", len(sql_files), path)

    result = LoadResult()
    for sql_file in sql_files:
        result = result + load_file(handle, sql_file)

    logger.info("Successfully loaded %d file(s)", result.files)
    return result


def load_path(handle: StatementExecutor, path: Union[str, Path]) -> LoadResult:
    """경로 종류에 따라 파일/디렉터리 로더로 분기."""
    path = Path(path)
    try:
        is_file, is_dir, exists = path.is_file(), path.is_dir(), path.exists()
    except OSError as e:
        raise ReadError(path, str(e)) from e

    if is_file:
        return load_file(handle, path)
    if is_dir:
        return load_directory(handle, path)
    if not exists:
        raise NotFoundError(path, kind="Path")
    raise ReadError(path, "not a file or directory")
