from pathlib import Path

import pytest
from sqlalchemy.exc import OperationalError

from sql_loader.db import EmbeddedHandle


class RecordingHandle:
    """Collects executed statements; raises for statements listed in `fail_on`."""

    def __init__(self, fail_on=()):
        self.executed = []
        self.fail_on = set(fail_on)

    def execute(self, statement):
        if statement in self.fail_on:
            raise OperationalError(statement, None, Exception(f"cannot run {statement!r}"))
        self.executed.append(statement)


@pytest.fixture()
def recorder() -> RecordingHandle:
    return RecordingHandle()


@pytest.fixture()
def sqlite_db():
    handle = EmbeddedHandle.open(":memory:").connect()
    yield handle
    handle.close()


@pytest.fixture()
def write_sql(tmp_path: Path):
    def _write(name: str, content: str, directory: Path = tmp_path) -> Path:
        path = directory / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


def fetch_all(handle, sql):
    return handle.connection.exec_driver_sql(sql).fetchall()
