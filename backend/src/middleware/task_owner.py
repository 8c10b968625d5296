"""
Task owner normalization.

Before any task route runs, a JSON object body that carries ``email`` gets
``userId`` set to the same value. The email is not validated; whatever
string was submitted becomes the owner identifier. Bodies that are not JSON
objects pass through untouched and the middleware never raises.
"""

import json
from typing import Any, Dict, Sequence

import structlog
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = structlog.get_logger(__name__)

OWNER_FIELD = "userId"
SOURCE_FIELD = "email"


def apply_owner_from_email(body: Dict[str, Any]) -> Dict[str, Any]:
    """Copy ``email`` into ``userId`` on the same dict when present."""
    if SOURCE_FIELD in body:
        body[OWNER_FIELD] = body[SOURCE_FIELD]
    return body


def normalize_json_body(raw: bytes) -> bytes:
    """
    Apply the owner rule to an encoded JSON body.

    Returns the original bytes when the body is not a JSON object or has no
    ``email`` field.
    """
    try:
        body = json.loads(raw)
    except (ValueError, RecursionError):
        return raw

    if not isinstance(body, dict) or SOURCE_FIELD not in body:
        return raw

    return json.dumps(apply_owner_from_email(body)).encode("utf-8")


def _is_json(scope: Scope) -> bool:
    """Same rule FastAPI uses to decode a body: application/json or application/*+json."""
    for name, value in scope.get("headers", []):
        if name == b"content-type":
            media_type = value.split(b";")[0].strip().lower()
            maintype, _, subtype = media_type.partition(b"/")
            return maintype == b"application" and (subtype == b"json" or subtype.endswith(b"+json"))
    return False


class TaskOwnerMiddleware:
    """ASGI middleware applying :func:`apply_owner_from_email` on task routes."""

    def __init__(self, app: ASGIApp, prefixes: Sequence[str] = ("/api/tasks", "/tasks")):
        self.app = app
        self.prefixes = tuple(prefix.rstrip("/") for prefix in prefixes)

    def applies_to(self, path: str) -> bool:
        return any(path == prefix or path.startswith(prefix + "/") for prefix in self.prefixes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self.applies_to(scope["path"]) or not _is_json(scope):
            await self.app(scope, receive, send)
            return

        chunks = []
        while True:
            message = await receive()
            if message["type"] != "http.request":
                # Client went away before the body was complete.
                return
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break

        raw = b"".join(chunks)
        body = normalize_json_body(raw)
        if body is not raw:
            logger.debug("task_owner_derived", path=scope["path"])
            headers = [
                (name, value) for name, value in scope["headers"] if name != b"content-length"
            ]
            headers.append((b"content-length", str(len(body)).encode("latin-1")))
            scope = {**scope, "headers": headers}

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)
