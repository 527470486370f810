"""Run the todo service: open the store, then serve HTTP.

Startup failures (bad configuration, database never became reachable, schema
could not be created) exit non-zero before the port is bound.
"""
from __future__ import annotations

import logging

import uvicorn

from todoapp.app import create_app
from todoapp.core.config import get_settings
from todoapp.core.errors import StoreError
from todoapp.core.logging import configure_logging
from todoapp.services.store_factory import open_store

logger = logging.getLogger("todoapp")


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        store = open_store(settings)
    except StoreError as exc:
        logger.error("Startup failed: %s", exc)
        raise SystemExit(f"Startup failed: {exc}") from exc
    try:
        uvicorn.run(
            create_app(store),
            host=settings.app_host,
            port=settings.app_port,
            log_level=logging.getLogger().getEffectiveLevel(),
        )
    finally:
        store.close()


if __name__ == "__main__":
    main()
