"""External store access."""

from lobby.store.client import (
    StoreApiError,
    StoreClient,
    StoreError,
    StoreResult,
    eq,
    is_null,
)
from lobby.store.provider import STORE_TRANSPORT_KEY, provide_store

__all__ = [
    "StoreApiError",
    "StoreClient",
    "StoreError",
    "StoreResult",
    "eq",
    "is_null",
    "STORE_TRANSPORT_KEY",
    "provide_store",
]
