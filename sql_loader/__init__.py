from .errors import (
    ExecutionError,
    NotFoundError,
    ReadError,
    SqlLoaderError,
    UnsupportedConfigurationError,
)
from .loader import LoadResult, load_directory, load_file, load_path

__version__ = "0.1.0"

__all__ = [
    "ExecutionError",
    "LoadResult",
    "NotFoundError",
    "ReadError",
    "SqlLoaderError",
    "UnsupportedConfigurationError",
    "load_directory",
    "load_file",
    "load_path",
]
