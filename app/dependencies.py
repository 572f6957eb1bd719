from fastapi import Request

from app.core.config import AppSettings
from app.core.errors import InternalError
from app.store.client import StoreClient


def get_settings(request: Request) -> AppSettings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise InternalError("Settings not initialized")
    return settings


def get_store(request: Request) -> StoreClient:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise InternalError("Store client not initialized")
    return store
