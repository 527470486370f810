"""Backend selection and the startup sequence that yields the process ItemStore."""
from __future__ import annotations

import logging
import time
from typing import Callable, Union

from todoapp.core.config import MySQLConfig, Settings, SQLiteConfig
from todoapp.core.errors import ConfigurationError
from todoapp.db.session import RetryPolicy
from todoapp.repositories.base import ItemStore
from todoapp.repositories.sql_repository import MySQLItemStore, SQLiteItemStore

logger = logging.getLogger(__name__)

BackendConfig = Union[SQLiteConfig, MySQLConfig]

MYSQL_VARIABLES = (
    ("MYSQL_HOST", "mysql_host"),
    ("MYSQL_USER", "mysql_user"),
    ("MYSQL_PASSWORD", "mysql_password"),
    ("MYSQL_DB", "mysql_db"),
)


def select_backend(settings: Settings) -> BackendConfig:
    """Pick the backend from configuration without connecting.

    Any MySQL variable selects MySQL, and then all four are required; with none
    of them set the SQLite file at ``settings.sqlite_location`` is used. A
    ``*_FILE`` variable that is set but unreadable or empty is an error, never
    a reason to fall back to SQLite.
    """
    if settings.secret_file_errors:
        raise ConfigurationError(
            "Unusable MySQL secret files: "
            + "; ".join(f"{var}: {problem}" for var, problem in settings.secret_file_errors)
        )
    present = {env: getattr(settings, attr) for env, attr in MYSQL_VARIABLES if getattr(settings, attr)}
    if not present:
        logger.info("No MySQL configuration found; selecting sqlite backend")
        return SQLiteConfig(path=settings.sqlite_location)
    missing = [env for env, _attr in MYSQL_VARIABLES if env not in present]
    if missing:
        raise ConfigurationError(
            "Incomplete MySQL configuration: set "
            + ", ".join(missing)
            + " (or the matching *_FILE variables), or unset "
            + ", ".join(present)
            + " to use sqlite"
        )
    logger.info("Selecting mysql backend at %s:%d", settings.mysql_host, settings.mysql_port)
    return MySQLConfig(
        host=settings.mysql_host,
        user=settings.mysql_user,
        password=settings.mysql_password,
        database=settings.mysql_db,
        port=settings.mysql_port,
    )


def open_store(
    settings: Settings,
    *,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> ItemStore:
    """Select, connect (retrying for MySQL) and initialize the schema.

    Raises ConfigurationError, StoreConnectionError or StorageError; callers at
    process start treat all of them as fatal.
    """
    config = select_backend(settings)
    if isinstance(config, MySQLConfig):
        return MySQLItemStore.open(config, RetryPolicy.from_settings(settings), sleep=sleep, clock=clock)
    return SQLiteItemStore.open(config)
