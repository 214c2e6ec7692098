# sql_loader/errors.py
from pathlib import Path
from typing import Union

from .utils.statements import preview

__all__ = [
    "SqlLoaderError",
    "NotFoundError",
    "ReadError",
    "ExecutionError",
    "UnsupportedConfigurationError",
]

PathLike = Union[str, Path]


class SqlLoaderError(Exception):
    """Base class for every error raised while loading SQL scripts."""


class NotFoundError(SqlLoaderError):
    def __init__(self, path: PathLike, kind: str = "File"):
        self.path = Path(path)
        self.kind = kind
        super().__init__(f"{kind} not found: {self.path}")


class ReadError(SqlLoaderError):
    """The path exists but its contents could not be read or listed."""

    def __init__(self, path: PathLike, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")


class ExecutionError(SqlLoaderError):
    """
    The database rejected a statement.
    - path: script the statement came from
    - index: 1-based position of the statement inside that script
    - statement: the statement text as sent to the database
    - message: the database's own error message
    """

    def __init__(self, path: PathLike, index: int, statement: str, message: str):
        self.path = Path(path)
        self.index = index
        self.statement = statement
        self.message = message
        super().__init__(
            f"Error executing statement #{index} in {self.path} "
            f"({preview(statement)}): {message}"
        )


class UnsupportedConfigurationError(SqlLoaderError):
    pass
