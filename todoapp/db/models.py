"""SQLAlchemy models for the todo items table."""
from __future__ import annotations

from sqlalchemy import Boolean, Column, Integer, String, false

from todoapp.domain.items import NAME_MAX_LENGTH, Item

from .session import Base


class TodoItem(Base):
    __tablename__ = "todo_items"
    # AUTOINCREMENT keeps SQLite from reusing the id of a deleted last row
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    completed = Column(Boolean, nullable=False, default=False, server_default=false())

    def to_item(self) -> Item:
        return Item(id=int(self.id), name=self.name, completed=bool(self.completed))
