import logging
from os import getenv
from typing import Optional

import httpx

from lobby.config import get_store_settings, is_debug, load_env_file

# Load .env before anything reads the store settings
if not getenv("SUPABASE_URL") or not getenv("SUPABASE_ANON_KEY"):
    loaded = load_env_file()
    if loaded:
        print(f"[Lobby] Loaded {loaded} environment variables from .env")

from litestar import Litestar, Request
from litestar.datastructures import State
from litestar.enums import MediaType
from litestar.exceptions import HTTPException
from litestar.response import Response
from litestar.status_codes import HTTP_500_INTERNAL_SERVER_ERROR

from lobby.api.cors import cors_config
from lobby.routes import ROUTES
from lobby.store import STORE_TRANSPORT_KEY
from lobby.utils.logging import log_request_error

DEBUG = is_debug()

logging.basicConfig(
    level=logging.DEBUG if DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger("Lobby")

logger.info(f"Starting app in {'DEBUG' if DEBUG else 'PRODUCTION'} mode")
if not get_store_settings().is_configured:
    logger.warning("SUPABASE_URL / SUPABASE_ANON_KEY not set; game endpoints will fail until configured")


# --- Exception handlers
def handle_http_exception(request: Request, exc: HTTPException) -> Response:
    """Render expected errors as plain text; store failures are logged where they occur."""
    return Response(
        content=exc.detail,
        status_code=exc.status_code,
        media_type=MediaType.TEXT,
        headers=exc.headers,
    )


def log_exceptions(request: Request, exc: Exception) -> Response:
    log_request_error(request, exc)
    return Response(
        content=str(exc) or "Internal Server Error",
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        media_type=MediaType.TEXT,
    )


# --- App init
def create_app(store_transport: Optional[httpx.AsyncBaseTransport] = None) -> Litestar:
    """Build the application; `store_transport` replaces the network transport to the store."""
    return Litestar(
        route_handlers=ROUTES,
        debug=DEBUG,
        cors_config=cors_config,
        state=State({STORE_TRANSPORT_KEY: store_transport}),
        exception_handlers={
            HTTPException: handle_http_exception,
            Exception: log_exceptions,
        },
    )


app = create_app()
