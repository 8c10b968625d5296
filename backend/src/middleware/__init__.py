"""Middleware components.

Request logging and metrics, and the task-owner body normalization that
runs before task routes.
"""

from backend.src.middleware.request_logging import RequestLoggingMiddleware
from backend.src.middleware.task_owner import (
    TaskOwnerMiddleware,
    apply_owner_from_email,
    normalize_json_body,
)

__all__ = [
    "RequestLoggingMiddleware",
    "TaskOwnerMiddleware",
    "apply_owner_from_email",
    "normalize_json_body",
]
