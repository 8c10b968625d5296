"""Structlog setup shared by the errand services.

Every entry carries the app name, environment and (when bound) the service
name and request correlation id. Credential fields never reach the output.
"""

import logging
import sys
from typing import Any, Dict, Iterable, Optional

import structlog
from structlog.types import EventDict, Processor

APP_NAME = "errand-platform"

REDACTED = "[redacted]"
SENSITIVE_KEYS = frozenset({"password", "password_hash", "access_token", "authorization", "jwt_secret_key"})

_app_context: Dict[str, str] = {"app": APP_NAME, "environment": "development"}


def add_app_context(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    for key, value in _app_context.items():
        event_dict.setdefault(key, value)
    return event_dict


def redact_credentials(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask values of credential keys, including one level into dict values."""
    for key, value in event_dict.items():
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
        elif isinstance(value, dict):
            event_dict[key] = {
                k: REDACTED if str(k).lower() in SENSITIVE_KEYS else v for k, v in value.items()
            }
    return event_dict


def build_processors(json_logs: bool) -> Iterable[Processor]:
    renderer: Processor = (
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        add_app_context,
        redact_credentials,
        renderer,
    ]


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    service_name: Optional[str] = None,
    environment: Optional[str] = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: JSON lines when True, console rendering otherwise
        service_name: Bound as ``service`` on every entry
        environment: Deployment environment added to every entry
    """
    if environment:
        _app_context["environment"] = environment

    structlog.configure(
        processors=list(build_processors(json_logs)),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # uvicorn and pymongo log through the stdlib root logger
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    if service_name:
        structlog.contextvars.bind_contextvars(service=service_name)


def bind_context(**kwargs: Any) -> None:
    """Bind key-values to every later entry of the current request context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)
