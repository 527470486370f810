"""
Persistence adapters.

Routers and services depend on the ItemStore interface; the concrete backend
(SQLite file or MySQL server) is chosen once at startup.
"""

from .base import ItemStore
from .sql_repository import MySQLItemStore, SQLiteItemStore, SQLItemStore

__all__ = ["ItemStore", "MySQLItemStore", "SQLiteItemStore", "SQLItemStore"]
