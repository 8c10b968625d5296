"""Structured logging for the errand services."""

from .structured_logger import bind_context, configure_logging, redact_credentials, unbind_context

__all__ = ["configure_logging", "bind_context", "unbind_context", "redact_credentials"]
