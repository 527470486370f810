"""ItemStore implementations backed by SQLAlchemy (SQLite file and MySQL server)."""
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from todoapp.core.config import MySQLConfig, SQLiteConfig
from todoapp.core.errors import NotFoundError, StorageError
from todoapp.db.create_tables import create_all
from todoapp.db.models import TodoItem
from todoapp.db.session import RetryPolicy, StoreHandle, open_mysql_handle, open_sqlite_handle
from todoapp.domain.items import Item, clean_update_fields, normalize_completed, normalize_name

from .base import ItemStore


class SQLItemStore(ItemStore):
    """CRUD helpers wrapping one short SQLAlchemy session per call."""

    def __init__(self, handle: StoreHandle) -> None:
        self.handle = handle

    @property
    def backend(self) -> str:
        return self.handle.backend

    @classmethod
    def _from_handle(cls, handle: StoreHandle):
        try:
            create_all(handle)
        except StorageError:
            handle.dispose()
            raise
        return cls(handle)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with self.handle.session() as session:
                yield session
        except SQLAlchemyError as exc:
            raise StorageError(f"{self.handle.backend} store failed: {exc}") from exc

    def list(self) -> list[Item]:
        with self._session() as session:
            rows = session.execute(select(TodoItem).order_by(TodoItem.id)).scalars().all()
            return [row.to_item() for row in rows]

    def get(self, item_id: int) -> Item:
        with self._session() as session:
            entity = session.get(TodoItem, item_id)
            if entity is None:
                raise NotFoundError(item_id)
            return entity.to_item()

    def create(self, name: str, completed: bool = False) -> Item:
        entity = TodoItem(name=normalize_name(name), completed=normalize_completed(completed))
        with self._session() as session:
            session.add(entity)
            session.commit()
            return entity.to_item()

    def update(self, item_id: int, fields: Optional[Mapping[str, Any]] = None) -> Item:
        values = clean_update_fields(fields)
        with self._session() as session:
            entity = session.get(TodoItem, item_id)
            if entity is None:
                raise NotFoundError(item_id)
            if values:
                for key, value in values.items():
                    setattr(entity, key, value)
                session.commit()
            return entity.to_item()

    def delete(self, item_id: int) -> None:
        with self._session() as session:
            entity = session.get(TodoItem, item_id)
            if entity is None:
                raise NotFoundError(item_id)
            session.delete(entity)
            session.commit()

    def close(self) -> None:
        self.handle.dispose()


class SQLiteItemStore(SQLItemStore):
    """Embedded single-file store; SQLite's file lock serializes writers."""

    @classmethod
    def open(cls, config: SQLiteConfig) -> "SQLiteItemStore":
        return cls._from_handle(open_sqlite_handle(config))


class MySQLItemStore(SQLItemStore):
    """Networked store; concurrency control is left to the MySQL server."""

    @classmethod
    def open(
        cls,
        config: MySQLConfig,
        policy: RetryPolicy,
        *,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> "MySQLItemStore":
        return cls._from_handle(open_mysql_handle(config, policy, sleep=sleep, clock=clock))
