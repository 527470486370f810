"""ItemStore interface shared by every persistence backend."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from todoapp.domain.items import Item


class ItemStore(ABC):
    """CRUD contract over todo items.

    Implementations must behave identically from the caller's point of view:

    - ``list`` returns items ordered by ascending id (empty list when empty);
    - ``get``/``update``/``delete`` raise NotFoundError for unknown ids;
    - ``create``/``update`` raise ValidationError for invalid data before
      touching the store. ``update`` validates ``fields`` before looking up
      the id, so invalid fields on a missing id raise ValidationError rather
      than NotFoundError; valid or empty fields on a missing id raise
      NotFoundError;
    - unexpected backend failures surface as StorageError and are not retried.
    """

    @property
    @abstractmethod
    def backend(self) -> str:
        """Short backend tag, e.g. ``sqlite`` or ``mysql``."""

    @abstractmethod
    def list(self) -> list[Item]:
        ...

    @abstractmethod
    def get(self, item_id: int) -> Item:
        ...

    @abstractmethod
    def create(self, name: str, completed: bool = False) -> Item:
        ...

    @abstractmethod
    def update(self, item_id: int, fields: Optional[Mapping[str, Any]] = None) -> Item:
        ...

    @abstractmethod
    def delete(self, item_id: int) -> None:
        ...

    def close(self) -> None:
        """Release backend resources; the store must not be used afterwards."""
