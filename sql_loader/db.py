# sql_loader/db.py
import logging
from typing import Optional, Union

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection, Engine, make_url

from .errors import UnsupportedConfigurationError
from .settings import Settings

__all__ = [
    "DatabaseHandle",
    "EmbeddedHandle",
    "NetworkedHandle",
    "sqlite_url",
    "postgres_url",
    "open_handle",
]

logger = logging.getLogger(__name__)

POSTGRES_DRIVER = "postgresql+psycopg"


def sqlite_url(path: str = ":memory:") -> URL:
    return URL.create("sqlite", database=path)


def postgres_url(
    host: str = "localhost",
    port: int = 5432,
    database: str = "postgres",
    user: str = "postgres",
    password: str = "",
) -> URL:
    return URL.create(
        POSTGRES_DRIVER,
        username=user,
        password=password or None,
        host=host,
        port=int(port),
        database=database,
    )


class DatabaseHandle:
    """
    열린 연결 하나를 감싸는 실행 핸들.
    - execute(statement): 문장 하나를 그대로(드라이버에 원문 전달) 실행
    - AUTOCOMMIT 이라 실행된 문장은 즉시 반영됨 (실패해도 이전 문장은 롤백되지 않음)
    - open/close 는 호출자(CLI) 책임
    """

    label = "database"

    def __init__(self, engine: Engine):
        self.engine = engine
        self.connection: Optional[Connection] = None

    def connect(self) -> "DatabaseHandle":
        if self.connection is None:
            self.connection = self.engine.connect().execution_options(
                isolation_level="AUTOCOMMIT",
                no_parameters=True,
            )
        return self

    def execute(self, statement: str) -> None:
        self.connect()
        self.connection.exec_driver_sql(statement)

    def close(self) -> None:
        if self.connection is not None:
            self.connection.close()
            self.connection = None
        self.engine.dispose()

    def __enter__(self):
        return self.connect()

    def __exit__(self, exc_type, exc, tb):
        self.close()


class EmbeddedHandle(DatabaseHandle):
    label = "SQLite"

    @classmethod
    def open(cls, target: Union[str, URL] = ":memory:") -> "EmbeddedHandle":
        url = target if isinstance(target, URL) else sqlite_url(target)
        engine = create_engine(url, connect_args={"check_same_thread": False})
        return cls(engine)


class NetworkedHandle(DatabaseHandle):
    label = "PostgreSQL"

    @classmethod
    def open(cls, url: Union[str, URL]) -> "NetworkedHandle":
        return cls(create_engine(url, pool_pre_ping=True))


def _handle_for_url(raw: str) -> DatabaseHandle:
    url = make_url(raw)
    backend = url.get_backend_name()
    if backend == "sqlite":
        logger.info("Opening SQLite database: %s", url.database or ":memory:")
        return EmbeddedHandle.open(url)
    if backend in ("postgres", "postgresql"):
        # 드라이버 미지정(postgres://, postgresql://)이면 psycopg 사용
        if "+" not in url.drivername:
            url = url.set(drivername=POSTGRES_DRIVER)
        logger.info("Connecting to PostgreSQL...")
        return NetworkedHandle.open(url)
    raise UnsupportedConfigurationError(f"Unsupported database URL backend: {backend}")


def open_handle(config: Settings) -> DatabaseHandle:
    """설정에 맞는 핸들을 만들고 연결까지 마친 상태로 돌려준다."""
    if config.database_url:
        handle = _handle_for_url(config.database_url)
    elif config.db_type == "postgres":
        logger.info("Connecting to PostgreSQL...")
        handle = NetworkedHandle.open(
            postgres_url(
                host=config.host,
                port=config.port,
                database=config.database,
                user=config.user,
                password=config.password,
            )
        )
    elif config.db_type == "sqlite":
        logger.info("Opening SQLite database: %s", config.sqlite_file)
        handle = EmbeddedHandle.open(config.sqlite_file)
    else:
        raise UnsupportedConfigurationError(f"Unsupported database type: {config.db_type}")

    try:
        handle.connect()
    except Exception:
        handle.close()
        raise
    logger.info("Connected to %s", handle.label)
    return handle
