"""Domain helpers for todo item values and validation."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Mapping

from todoapp.core.errors import ValidationError

NAME_MAX_LENGTH = 255
UPDATABLE_FIELDS = frozenset({"name", "completed"})


@dataclass(frozen=True)
class Item:
    """A todo entry detached from any database session."""

    id: int
    name: str
    completed: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def normalize_name(value: Any) -> str:
    """Return the stripped name or raise ValidationError."""
    if not isinstance(value, str):
        raise ValidationError("Item name must be a string")
    name = value.strip()
    if not name:
        raise ValidationError("Item name must not be empty")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(f"Item name must be at most {NAME_MAX_LENGTH} characters")
    return name


def normalize_completed(value: Any) -> bool:
    # bool only; 0/1 and "true" are rejected
    if not isinstance(value, bool):
        raise ValidationError("Item completed flag must be a boolean")
    return value


def clean_update_fields(fields: Mapping[str, Any] | None) -> dict:
    """Validate a partial update and return only the supported, normalized fields."""
    if not fields:
        return {}
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise ValidationError(f"Unsupported item fields: {', '.join(sorted(unknown))}")
    cleaned: dict = {}
    if "name" in fields:
        cleaned["name"] = normalize_name(fields["name"])
    if "completed" in fields:
        cleaned["completed"] = normalize_completed(fields["completed"])
    return cleaned
