"""
Route boundary error envelope.

``route_guard(message)`` wraps an endpoint so that no exception escapes it:
- ``HTTPException`` passes through to FastAPI unchanged
- ``ErrandError`` answers with its own status and message
- anything else is logged and answered with 500 and the route's fixed message

Every failure body has the shape ``{"error": "<message>"}``.
"""

import functools
from typing import Any, Awaitable, Callable

import structlog
from fastapi import HTTPException, status
from fastapi.responses import JSONResponse

from backend.src.errors import ErrandError

logger = structlog.get_logger(__name__)

Endpoint = Callable[..., Awaitable[Any]]


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def route_guard(failure_message: str) -> Callable[[Endpoint], Endpoint]:
    """
    Wrap an async endpoint in the error envelope.

    Args:
        failure_message: Body ``error`` value for unexpected failures

    Example:
        @router.get("")
        @route_guard("Failed to retrieve agents.")
        async def get_all_agents(...):
            ...
    """
    def decorator(endpoint: Endpoint) -> Endpoint:
        @functools.wraps(endpoint)
        async def guarded(*args, **kwargs):
            try:
                return await endpoint(*args, **kwargs)
            except HTTPException:
                raise
            except ErrandError as e:
                logger.warning(
                    "route_rejected",
                    route=endpoint.__name__,
                    status_code=e.status_code,
                    error=e.message
                )
                return error_response(e.status_code, e.message)
            except Exception as e:
                logger.error(
                    "route_failed",
                    route=endpoint.__name__,
                    error=str(e),
                    exc_info=True
                )
                return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, failure_message)

        return guarded

    return decorator
