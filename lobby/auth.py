"""Caller identity resolution, delegated to the store's auth service."""

import logging

from litestar.exceptions import NotAuthorizedException

from lobby.store import StoreClient, StoreError
from lobby.utils.logging import error_log

logger = logging.getLogger("Lobby.auth")


async def resolve_identity(store: StoreClient) -> str:
    """
    Return the id of the user behind the request's bearer credential.

    Raises NotAuthorizedException when the store cannot resolve a user, and
    StoreError when the store itself failed.
    """
    result = await store.get_user()

    if result.error is not None:
        if not result.error.is_client_error:
            error_log("Identity lookup failed", context={"store_error": result.error.message})
            raise StoreError(detail=result.error.message)
        logger.info(f"Credential rejected by store: {result.error.message}")
        raise NotAuthorizedException()

    user = result.data if isinstance(result.data, dict) else {}
    user_id = user.get("id")
    if not user_id:
        raise NotAuthorizedException()
    return str(user_id)
