from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todoapp.core.errors import NotFoundError, StorageError, StoreError, ValidationError
from todoapp.repositories.base import ItemStore

router = APIRouter(tags=["items"])

ERROR_STATUS = {
    ValidationError: 400,
    NotFoundError: 404,
    StorageError: 503,
}


def _get_store(request: Request) -> ItemStore:
    store = getattr(getattr(request.app, "state", None), "store", None)
    if not store:
        raise RuntimeError("ItemStore not configured")
    return store


def _error_response(err: StoreError) -> JSONResponse:
    status_code = next((code for kind, code in ERROR_STATUS.items() if isinstance(err, kind)), 500)
    return JSONResponse({"ok": False, "error": err.code, "message": err.message}, status_code=status_code)


def _body_dict(payload: Any) -> dict:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


@router.get("/healthz")
def healthz(request: Request):
    store = _get_store(request)
    return {"ok": True, "backend": store.backend}


@router.get("/items")
def list_items(request: Request):
    try:
        items = _get_store(request).list()
    except StoreError as err:
        return _error_response(err)
    return [item.to_dict() for item in items]


@router.get("/items/{item_id}")
def get_item(item_id: int, request: Request):
    try:
        item = _get_store(request).get(item_id)
    except StoreError as err:
        return _error_response(err)
    return item.to_dict()


@router.post("/items", status_code=201)
def create_item(request: Request, payload: Any = Body(None)):
    try:
        body = _body_dict(payload)
        item = _get_store(request).create(body.get("name"), body.get("completed", False))
    except StoreError as err:
        return _error_response(err)
    return item.to_dict()


@router.put("/items/{item_id}")
def update_item(item_id: int, request: Request, payload: Any = Body(None)):
    try:
        item = _get_store(request).update(item_id, _body_dict(payload))
    except StoreError as err:
        return _error_response(err)
    return item.to_dict()


@router.delete("/items/{item_id}", status_code=204)
def delete_item(item_id: int, request: Request):
    try:
        _get_store(request).delete(item_id)
    except StoreError as err:
        return _error_response(err)
    return Response(status_code=204)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON bodies get the same error shape as store validation failures."""
    errors = exc.errors()
    detail = errors[0].get("msg") if errors else "Invalid request"
    return _error_response(ValidationError(f"Invalid request body: {detail}"))
