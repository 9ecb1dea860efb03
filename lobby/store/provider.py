"""Per-request store client dependency."""

from typing import AsyncGenerator

from litestar import Request

from lobby.config import get_store_settings
from lobby.store.client import StoreClient, StoreError
from lobby.utils.logging import error_log

STORE_TRANSPORT_KEY = "store_transport"


async def provide_store(request: Request) -> AsyncGenerator[StoreClient, None]:
    """Yield a store client bound to the caller's credential, closed after the response."""
    settings = get_store_settings()
    if not settings.is_configured:
        error_log("Store is not configured", context={"path": request.url.path})
        raise StoreError(detail="Store is not configured")

    async with StoreClient(
        settings,
        authorization=request.headers.get("Authorization"),
        transport=request.app.state.get(STORE_TRANSPORT_KEY),
    ) as store:
        yield store
