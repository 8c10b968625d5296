"""
Unit tests for the structlog configuration.

Tests cover:
- Credential fields are masked
- App context is added without overriding explicit values
- Context binding and unbinding
"""

import logging

import structlog

from shared.logging import bind_context, configure_logging, redact_credentials, unbind_context
from shared.logging.structured_logger import REDACTED, add_app_context


class TestRedactCredentials:

    def test_top_level_keys(self):
        event = redact_credentials(None, "info", {
            "event": "login_failed",
            "email": "kofi@example.com",
            "password": "SecurePassword123!",
            "access_token": "eyJ...",
        })

        assert event["password"] == REDACTED
        assert event["access_token"] == REDACTED
        assert event["email"] == "kofi@example.com"

    def test_nested_dict_values(self):
        event = redact_credentials(None, "info", {
            "event": "user_updated",
            "changes": {"name": "Kofi", "password_hash": "$pbkdf2-sha256$..."},
        })

        assert event["changes"] == {"name": "Kofi", "password_hash": REDACTED}

    def test_key_match_is_case_insensitive(self):
        event = redact_credentials(None, "info", {"event": "e", "Authorization": "Bearer x"})
        assert event["Authorization"] == REDACTED


class TestAppContext:

    def test_adds_defaults(self):
        event = add_app_context(None, "info", {"event": "e"})

        assert event["app"] == "errand-platform"
        assert "environment" in event

    def test_keeps_explicit_values(self):
        event = add_app_context(None, "info", {"event": "e", "app": "other"})
        assert event["app"] == "other"


class TestConfigureLogging:

    def test_bound_context_reaches_entries(self, caplog):
        caplog.set_level(logging.INFO)
        configure_logging(log_level="INFO", json_logs=True, service_name="errand-backend", environment="staging")
        bind_context(correlation_id="abc-123")
        try:
            structlog.get_logger("errand.test").info("agent_created", agent_id="a1", password="hidden")
        finally:
            unbind_context("correlation_id", "service")

        output = "\n".join(caplog.messages)
        assert '"correlation_id": "abc-123"' in output
        assert '"service": "errand-backend"' in output
        assert '"environment": "staging"' in output
        assert "hidden" not in output
