"""Create the items table if it does not exist yet."""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from todoapp.core.errors import StorageError

from .session import Base, StoreHandle
from . import models  # noqa: F401  # ensure models are imported for metadata

logger = logging.getLogger(__name__)


def create_all(handle: StoreHandle) -> None:
    """Idempotent: existing tables and their rows are left untouched."""
    try:
        Base.metadata.create_all(bind=handle.engine, checkfirst=True)
    except SQLAlchemyError as exc:
        raise StorageError(f"Failed to initialize {handle.backend} schema: {exc}") from exc
    logger.info("Schema ready on %s store", handle.backend)


if __name__ == "__main__":
    from todoapp.core.config import get_settings
    from todoapp.core.errors import StoreError
    from todoapp.core.logging import configure_logging
    from todoapp.services.store_factory import open_store

    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        store = open_store(settings)
    except StoreError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
    store.close()
    print("Database tables created successfully.")
