"""
Configuration helpers for the todo service.

Exposes a Settings object that reads environment variables (database
credentials, SQLite location, connection retry budget, HTTP bind address) so
that the rest of the code does not fetch os.environ directly.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
import os
from typing import Optional

DEFAULT_SQLITE_LOCATION = "/etc/todos/todo.db"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    mysql_host: Optional[str]
    mysql_port: int
    mysql_user: Optional[str]
    mysql_password: Optional[str]
    mysql_db: Optional[str]
    sqlite_location: str
    connect_attempts: int
    connect_delay: float
    connect_backoff: float
    connect_max_delay: float
    connect_timeout: float
    app_host: str
    app_port: int
    log_level: str
    # (variable, problem) for every NAME_FILE that was set but gave no value
    secret_file_errors: tuple = ()


def _read_env_or_file(name: str, errors: list) -> Optional[str]:
    """Return NAME, or the contents of the file named by NAME_FILE.

    Empty values count as absent. The direct variable wins when both are set.
    A NAME_FILE that cannot be read or is empty is recorded in ``errors``.
    """
    value = (os.getenv(name) or "").strip()
    if value:
        return value
    file_name = (os.getenv(f"{name}_FILE") or "").strip()
    if not file_name:
        return None
    try:
        contents = Path(file_name).read_text(encoding="utf-8").strip()
    except OSError as exc:
        errors.append((f"{name}_FILE", f"cannot read {file_name}: {exc.strerror or exc}"))
        return None
    if not contents:
        errors.append((f"{name}_FILE", f"{file_name} is empty"))
        return None
    return contents


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _float(value: str, default: float = 0.0) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return default

    file_errors: list = []
    return Settings(
        mysql_host=_read_env_or_file("MYSQL_HOST", file_errors),
        mysql_port=_int(os.getenv("MYSQL_PORT", "3306"), 3306),
        mysql_user=_read_env_or_file("MYSQL_USER", file_errors),
        mysql_password=_read_env_or_file("MYSQL_PASSWORD", file_errors),
        mysql_db=_read_env_or_file("MYSQL_DB", file_errors),
        sqlite_location=(os.getenv("SQLITE_DB_LOCATION") or "").strip() or DEFAULT_SQLITE_LOCATION,
        connect_attempts=max(1, _int(os.getenv("DB_CONNECT_ATTEMPTS", "10"), 10)),
        connect_delay=max(0.0, _float(os.getenv("DB_CONNECT_DELAY", "1.0"), 1.0)),
        connect_backoff=max(1.0, _float(os.getenv("DB_CONNECT_BACKOFF", "2.0"), 2.0)),
        connect_max_delay=max(0.0, _float(os.getenv("DB_CONNECT_MAX_DELAY", "10.0"), 10.0)),
        connect_timeout=max(0.0, _float(os.getenv("DB_CONNECT_TIMEOUT", "60.0"), 60.0)),
        app_host=os.getenv("APP_HOST", "0.0.0.0"),
        app_port=_int(os.getenv("APP_PORT", "3000"), 3000),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        secret_file_errors=tuple(file_errors),
    )


@dataclass(frozen=True)
class SQLiteConfig:
    """Embedded single-file backend parameters."""

    path: str

    backend = "sqlite"


@dataclass(frozen=True)
class MySQLConfig:
    """Networked MySQL backend parameters."""

    host: str
    user: str
    password: str = field(repr=False)
    database: str
    port: int = 3306

    backend = "mysql"
