"""Error taxonomy shared by the persistence layer and its callers."""
from __future__ import annotations


class StoreError(Exception):
    """Base exception for the todo store."""

    code = "store_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(StoreError):
    """Raised when backend configuration is incomplete or inconsistent."""

    code = "configuration_error"


class StoreConnectionError(StoreError):
    """Raised when a usable connection to the backend cannot be established."""

    code = "connection_error"


class ValidationError(StoreError):
    """Raised when caller-supplied item data is invalid."""

    code = "validation_error"


class NotFoundError(StoreError):
    """Raised when the referenced item id does not exist."""

    code = "not_found"

    def __init__(self, item_id: int) -> None:
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id


class StorageError(StoreError):
    """Raised when the backend fails unexpectedly in the middle of an operation."""

    code = "storage_error"
