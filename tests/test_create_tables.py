from __future__ import annotations

import sys
from pathlib import Path

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

# Make the todoapp package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from todoapp.core.config import SQLiteConfig  # noqa: E402
from todoapp.core.errors import StorageError  # noqa: E402
from todoapp.db import session as db_session  # noqa: E402
from todoapp.db.create_tables import create_all  # noqa: E402
from todoapp.repositories.sql_repository import SQLiteItemStore  # noqa: E402


@pytest.fixture()
def handle(tmp_path):
    h = db_session.open_sqlite_handle(SQLiteConfig(path=str(tmp_path / "schema.db")))
    yield h
    h.dispose()


def _columns(handle) -> dict:
    return {col["name"]: col for col in inspect(handle.engine).get_columns("todo_items")}


def test_create_all_builds_items_table(handle):
    create_all(handle)
    columns = _columns(handle)
    assert set(columns) == {"id", "name", "completed"}
    assert columns["name"]["nullable"] is False
    assert columns["completed"]["nullable"] is False
    assert inspect(handle.engine).get_pk_constraint("todo_items")["constrained_columns"] == ["id"]


def test_create_all_twice_is_idempotent(handle):
    create_all(handle)
    before = {name: str(col["type"]) for name, col in _columns(handle).items()}
    create_all(handle)
    after = {name: str(col["type"]) for name, col in _columns(handle).items()}
    assert before == after


def test_existing_rows_survive_reinitialization(tmp_path):
    config = SQLiteConfig(path=str(tmp_path / "keep.db"))
    store = SQLiteItemStore.open(config)
    created = store.create("survivor")
    create_all(store.handle)
    store.close()

    reopened = SQLiteItemStore.open(config)
    try:
        assert reopened.list() == [created]
    finally:
        reopened.close()


def test_completed_defaults_to_false_at_database_level(handle):
    create_all(handle)
    with handle.engine.begin() as conn:
        conn.exec_driver_sql("INSERT INTO todo_items (name) VALUES ('raw insert')")
    store = SQLiteItemStore(handle)
    [item] = store.list()
    assert item.completed is False


def test_create_all_failure_raises_storage_error(handle, monkeypatch):
    def boom(*args, **kwargs):
        raise OperationalError("CREATE TABLE todo_items", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db_session.Base.metadata, "create_all", boom)
    with pytest.raises(StorageError) as excinfo:
        create_all(handle)
    assert "sqlite" in str(excinfo.value)
