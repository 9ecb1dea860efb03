"""Logging helpers: debug output gated on APP_DEBUG, errors with context."""

import logging
from typing import Any, Optional

from lobby.config import is_debug

logger = logging.getLogger("Lobby")


def debug_log(message: str, *args: Any) -> None:
    if is_debug():
        logger.debug(message, *args)


def error_log(
    message: str,
    exc: Optional[BaseException] = None,
    context: Optional[dict] = None,
) -> None:
    """Log `message` joined with `key=value` context; the traceback is attached when `exc` is given."""
    parts = [message]
    if context:
        parts.append(", ".join(f"{k}={v}" for k, v in context.items()))
    if exc:
        parts.append(f"{type(exc).__name__}: {exc}")
    logger.error(" | ".join(parts), exc_info=exc)


def log_request_error(request: Any, exc: BaseException, message: Optional[str] = None) -> None:
    """error_log with the request's path, method and user agent as context."""
    context = {
        "path": request.url.path,
        "method": request.method,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }
    error_log(message or f"Unhandled exception: {type(exc).__name__}", exc=exc, context=context)
