"""Engine/session helpers and connection establishment for both backends.

The StoreHandle built here is the single process-wide database resource. It is
created once at startup and passed explicitly to the repositories; nothing in
this module keeps a global engine.
"""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from todoapp.core.config import MySQLConfig, Settings, SQLiteConfig
from todoapp.core.errors import StoreConnectionError

logger = logging.getLogger(__name__)

Base = declarative_base()

SQLITE_BUSY_TIMEOUT = 15
MYSQL_CONNECT_TIMEOUT = 5


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry budget for reaching a database that may still be booting.

    ``timeout`` is an overall deadline in seconds; zero disables it and leaves
    ``attempts`` as the only bound.
    """

    attempts: int = 10
    delay: float = 1.0
    backoff: float = 2.0
    max_delay: float = 10.0
    timeout: float = 60.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            attempts=settings.connect_attempts,
            delay=settings.connect_delay,
            backoff=settings.connect_backoff,
            max_delay=settings.connect_max_delay,
            timeout=settings.connect_timeout,
        )


@dataclass
class StoreHandle:
    """Live engine plus session factory for the selected backend."""

    backend: str
    engine: Engine
    session_factory: sessionmaker

    @contextmanager
    def session(self) -> Iterator[Session]:
        session: Session = self.session_factory()
        try:
            yield session
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Closed %s store", self.backend)


def _make_handle(backend: str, engine: Engine) -> StoreHandle:
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)
    return StoreHandle(backend=backend, engine=engine, session_factory=factory)


def _describe(exc: BaseException) -> str:
    return str(getattr(exc, "orig", None) or exc)


def _safe_url(engine: Engine) -> str:
    return engine.url.render_as_string(hide_password=True)


def probe(engine: Engine) -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def wait_for_connection(
    engine: Engine,
    policy: RetryPolicy,
    *,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> int:
    """Probe ``engine`` until it answers, returning the number of attempts used.

    Raises StoreConnectionError once the attempt budget or the deadline is
    exhausted. Only connection-level failures are retried; anything else
    propagates on the first occurrence.
    """
    started = clock()
    delay = policy.delay
    attempt = 0
    last_error = ""
    while attempt < policy.attempts:
        attempt += 1
        try:
            probe(engine)
            if attempt > 1:
                logger.info("Connected to %s after %d attempts", _safe_url(engine), attempt)
            return attempt
        except (OperationalError, InterfaceError) as exc:
            last_error = _describe(exc)
        elapsed = clock() - started
        remaining = policy.timeout - elapsed if policy.timeout > 0 else float("inf")
        if attempt >= policy.attempts or remaining <= 0:
            logger.warning(
                "Database not ready (attempt %d/%d): %s",
                attempt,
                policy.attempts,
                last_error,
            )
            break
        pause = min(delay, policy.max_delay, remaining)
        logger.warning(
            "Database not ready (attempt %d/%d): %s; retrying in %.1fs",
            attempt,
            policy.attempts,
            last_error,
            pause,
        )
        sleep(pause)
        delay *= policy.backoff
    raise StoreConnectionError(
        f"Could not connect to {_safe_url(engine)} after {attempt} attempt(s): {last_error}"
    )


def create_sqlite_engine(path: str | Path) -> Engine:
    db_path = Path(path).expanduser().resolve()
    return create_engine(
        f"sqlite:///{db_path}",
        future=True,
        connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
    )


def create_mysql_engine(config: MySQLConfig) -> Engine:
    url = URL.create(
        "mysql+pymysql",
        username=config.user,
        password=config.password,
        host=config.host,
        port=config.port,
        database=config.database,
        query={"charset": "utf8mb4"},
    )
    return create_engine(
        url,
        future=True,
        pool_pre_ping=True,
        pool_recycle=3600,
        connect_args={"connect_timeout": MYSQL_CONNECT_TIMEOUT},
    )


def open_sqlite_handle(config: SQLiteConfig) -> StoreHandle:
    """Open (creating if absent) the SQLite file. Fails fast, never retries."""
    db_path = Path(config.path).expanduser()
    try:
        db_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StoreConnectionError(f"Cannot create directory for {db_path}: {exc}") from exc
    engine = create_sqlite_engine(db_path)
    try:
        probe(engine)
    except SQLAlchemyError as exc:
        engine.dispose()
        raise StoreConnectionError(f"Cannot open sqlite database at {db_path}: {_describe(exc)}") from exc
    logger.info("Using sqlite database at %s", db_path)
    return _make_handle("sqlite", engine)


def open_mysql_handle(
    config: MySQLConfig,
    policy: RetryPolicy,
    *,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> StoreHandle:
    """Connect to MySQL, retrying within ``policy`` while the server comes up."""
    engine = create_mysql_engine(config)
    try:
        wait_for_connection(engine, policy, sleep=sleep, clock=clock)
    except StoreConnectionError:
        engine.dispose()
        raise
    except SQLAlchemyError as exc:
        engine.dispose()
        raise StoreConnectionError(f"Cannot use mysql database at {_safe_url(engine)}: {_describe(exc)}") from exc
    logger.info("Connected to mysql database at %s", _safe_url(engine))
    return _make_handle("mysql", engine)
