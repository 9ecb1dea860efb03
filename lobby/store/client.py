"""HTTP client for the external store (auth + table API)."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from litestar.exceptions import HTTPException
from litestar.status_codes import HTTP_500_INTERNAL_SERVER_ERROR

from lobby.config import StoreSettings
from lobby.utils.logging import debug_log

logger = logging.getLogger("Lobby.store")

AUTH_PATH = "/auth/v1"
REST_PATH = "/rest/v1"


class StoreError(HTTPException):
    """Any failure reported by, or while talking to, the store."""
    status_code = HTTP_500_INTERNAL_SERVER_ERROR


@dataclass
class StoreApiError:
    """Error payload returned by the store."""
    message: str
    status: Optional[int] = None
    code: Optional[str] = None
    details: Optional[str] = None
    hint: Optional[str] = None

    @property
    def is_client_error(self) -> bool:
        return self.status is not None and 400 <= self.status < 500

    @classmethod
    def from_response(cls, response: httpx.Response) -> "StoreApiError":
        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            return cls(message=response.text or response.reason_phrase, status=response.status_code)

        # REST errors use "message", auth errors use "msg" or "error_description"
        message = (
            body.get("message")
            or body.get("msg")
            or body.get("error_description")
            or body.get("error")
            or response.reason_phrase
        )
        code = body.get("code")
        return cls(
            message=str(message),
            status=response.status_code,
            code=str(code) if code is not None else None,
            details=body.get("details"),
            hint=body.get("hint"),
        )


@dataclass
class StoreResult:
    """Outcome of a store call: exactly one of data/error is meaningful."""
    data: Any = None
    error: Optional[StoreApiError] = None

    def raise_for_error(self) -> "StoreResult":
        if self.error is not None:
            raise StoreError(detail=self.error.message)
        return self


def eq(value: Any) -> str:
    """PostgREST equality filter."""
    return f"eq.{value}"


def is_null() -> str:
    """PostgREST IS NULL filter."""
    return "is.null"


class StoreClient:
    """
    Store client bound to a single caller's credential.

    One instance is created per request; the caller's Authorization header
    is forwarded on every call so the store applies its own access rules.
    """

    def __init__(
        self,
        settings: StoreSettings,
        authorization: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.authorization = authorization
        headers = {
            "apikey": settings.anon_key,
            "Authorization": authorization or f"Bearer {settings.anon_key}",
        }
        self._client = httpx.AsyncClient(
            base_url=settings.url,
            headers=headers,
            timeout=settings.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "StoreClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def has_credential(self) -> bool:
        if not self.authorization:
            return False
        scheme, _, token = self.authorization.partition(" ")
        return scheme.lower() == "bearer" and bool(token.strip())

    async def _request(self, method: str, path: str, **kwargs) -> StoreResult:
        debug_log("Store request: %s %s", method, path)
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException:
            logger.warning(f"Timeout calling store: {method} {path}")
            return StoreResult(error=StoreApiError(message="Store request timed out"))
        except httpx.RequestError as e:
            logger.warning(f"Request error calling store: {method} {path}: {e}")
            return StoreResult(error=StoreApiError(message=f"Failed to connect to store: {e}"))

        debug_log("Store response: %s %s -> %s", method, path, response.status_code)
        if response.is_error:
            error = StoreApiError.from_response(response)
            logger.warning(f"Store error {response.status_code} on {method} {path}: {error.message}")
            return StoreResult(error=error)

        if not response.content:
            return StoreResult(data=None)
        try:
            return StoreResult(data=response.json())
        except ValueError:
            return StoreResult(error=StoreApiError(
                message="Store returned an invalid JSON body",
                status=response.status_code,
            ))

    # --- Identity ---

    async def get_user(self) -> StoreResult:
        """Resolve the forwarded credential to a user object."""
        if not self.has_credential:
            return StoreResult(data=None)
        return await self._request("GET", f"{AUTH_PATH}/user")

    # --- Tables ---

    async def insert(self, table: str, rows: list[dict]) -> StoreResult:
        """Insert rows and return them as stored."""
        return await self._request(
            "POST",
            f"{REST_PATH}/{table}",
            json=rows,
            headers={"Prefer": "return=representation"},
        )

    async def select(self, table: str, filters: dict[str, str], columns: str = "*") -> StoreResult:
        """Select rows matching every filter."""
        return await self._request(
            "GET",
            f"{REST_PATH}/{table}",
            params={"select": columns, **filters},
        )

    async def update(self, table: str, values: dict, filters: dict[str, str]) -> StoreResult:
        """Patch rows matching every filter and return the rows that changed."""
        return await self._request(
            "PATCH",
            f"{REST_PATH}/{table}",
            params=filters,
            json=values,
            headers={"Prefer": "return=representation"},
        )
