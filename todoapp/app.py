from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from todoapp.core.config import get_settings
from todoapp.repositories.base import ItemStore
from todoapp.routers import items as items_router
from todoapp.services.store_factory import open_store

logger = logging.getLogger(__name__)


def create_app(store: Optional[ItemStore] = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn.

    When ``store`` is given it is used as-is and stays owned by the caller.
    Otherwise the store is opened during startup from the environment, and a
    failure there aborts the server before it accepts requests.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = store is None
        app.state.store = open_store(get_settings()) if owned else store
        logger.info("Serving items from %s store", app.state.store.backend)
        try:
            yield
        finally:
            if owned:
                app.state.store.close()

    app = FastAPI(title="Todo Items API", lifespan=lifespan)
    if store is not None:
        app.state.store = store
    app.add_exception_handler(RequestValidationError, items_router.request_validation_handler)
    app.include_router(items_router.router)
    return app
