# sql_loader/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    db_type: str = "sqlite"  # postgres | sqlite
    host: str = "localhost"
    port: int = 5432
    database: str = "postgres"
    user: str = "postgres"
    password: str = ""
    sqlite_file: str = ":memory:"
    database_url: Optional[str] = None  # 지정하면 위의 개별 항목보다 우선
    log_level: str = "info"

    model_config = SettingsConfigDict(
        env_prefix="SQL_LOADER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

settings = Settings()
