"""Database helpers (store handle, connection retry, schema)."""

from .session import Base, RetryPolicy, StoreHandle, open_mysql_handle, open_sqlite_handle

__all__ = ["Base", "RetryPolicy", "StoreHandle", "open_mysql_handle", "open_sqlite_handle"]
