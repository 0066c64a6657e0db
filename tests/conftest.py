"""Shared pytest fixtures and configuration.

Fixture Categories:
1. Settings: mock_settings
2. Logging: mock_logfire, logfire_capture
3. Services: conversation_store, mock_messaging_service, failing_messaging_service,
   reply_generator, message_processor
4. Payloads: messaging_payload, changes_payload
5. App: test_client, app_state
"""

import os
import sys
from contextlib import contextmanager
from unittest.mock import MagicMock, Mock, patch

import httpx
import pytest

from ig_relay.services.conversation_store import InMemoryConversationStore
from ig_relay.services.message_processor import MessageProcessor
from ig_relay.services.messaging_protocol import MockMessagingService
from ig_relay.services.reply_generator import ReplyGenerator, StaticReplyModel

# Tests never ship spans to Logfire
os.environ.setdefault("LOGFIRE_IGNORE_NO_CONFIG", "1")
os.environ.setdefault("LOGFIRE_SEND_TO_LOGFIRE", "false")

TEST_REPLY = "Thanks for your message!"
MESSAGES_URL = "https://graph.instagram.com/v23.0/17841400000000000/messages"


# =============================================================================
# Settings
# =============================================================================


@pytest.fixture
def mock_settings(monkeypatch):
    """Mock application settings."""
    from ig_relay.config import Settings

    settings = Settings(
        verify_token="test-verify-token",
        ig_id="17841400000000000",
        access_token="test-access-token",
        app_secret=None,
        reply_text=TEST_REPLY,
        env="local",
        logfire_token=None,
        sentry_dsn=None,
    )

    monkeypatch.setattr("ig_relay.config.get_settings", lambda: settings)
    # Patch where get_settings is used so request handlers see the mock
    monkeypatch.setattr("ig_relay.main.get_settings", lambda: settings)
    monkeypatch.setattr("ig_relay.api.webhook.get_settings", lambda: settings)
    monkeypatch.setattr(
        "ig_relay.services.instagram_service.get_settings", lambda: settings
    )
    return settings


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture
def mock_logfire(monkeypatch):
    """
    Mock Logfire for testing without actual logging.

    Useful for tests that don't need to verify logging behavior.
    """

    @contextmanager
    def mock_span(*args, **kwargs):
        yield MagicMock()

    mock_logfire_module = MagicMock()
    mock_logfire_module.info = Mock()
    mock_logfire_module.warn = Mock()
    mock_logfire_module.error = Mock()
    mock_logfire_module.span = mock_span
    mock_logfire_module.configure = Mock()
    mock_logfire_module.instrument_fastapi = Mock()
    mock_logfire_module.instrument_pydantic = Mock()

    if "logfire" in sys.modules:
        original_logfire = sys.modules["logfire"]
        for attr in [
            "info",
            "warn",
            "error",
            "span",
            "configure",
            "instrument_fastapi",
            "instrument_pydantic",
        ]:
            if hasattr(original_logfire, attr):
                monkeypatch.setattr(
                    original_logfire, attr, getattr(mock_logfire_module, attr)
                )

    # Module-level imports in our code
    monkeypatch.setattr("ig_relay.logging_config.logfire", mock_logfire_module)
    monkeypatch.setattr("ig_relay.main.logfire", mock_logfire_module)
    monkeypatch.setattr("ig_relay.middleware.correlation_id.logfire", mock_logfire_module)
    monkeypatch.setattr(
        "ig_relay.services.instagram_service.logfire", mock_logfire_module
    )
    monkeypatch.setattr(
        "ig_relay.services.message_processor.logfire", mock_logfire_module
    )
    monkeypatch.setattr("ig_relay.services.reply_generator.logfire", mock_logfire_module)

    return mock_logfire_module


@pytest.fixture
def logfire_capture():
    """
    Capture Logfire logs for testing.

    This fixture patches Logfire to capture log calls for assertion.
    """
    captured_logs = []

    def capture(level):
        def _capture(*args, **kwargs):
            captured_logs.append((level, args, kwargs))

        return _capture

    with (
        patch("ig_relay.services.instagram_service.logfire.info", side_effect=capture("info")),
        patch("ig_relay.services.instagram_service.logfire.error", side_effect=capture("error")),
    ):
        yield captured_logs


# =============================================================================
# Services
# =============================================================================


@pytest.fixture
def reply_text():
    """Static reply configured for tests."""
    return TEST_REPLY


@pytest.fixture
def conversation_store():
    """Empty in-memory conversation store."""
    return InMemoryConversationStore()


@pytest.fixture
def mock_messaging_service():
    """Messaging service that records every send and always succeeds."""
    return MockMessagingService()


@pytest.fixture
def failing_messaging_service():
    """Messaging service whose sends fail with an HTTP 500 from the API."""
    request = httpx.Request("POST", MESSAGES_URL)
    response = httpx.Response(500, request=request, text="Internal error")
    return MockMessagingService(
        error=httpx.HTTPStatusError(
            "Server error '500 Internal Server Error'",
            request=request,
            response=response,
        )
    )


@pytest.fixture
def reply_generator(conversation_store):
    """ReplyGenerator with the static test reply."""
    return ReplyGenerator(conversation_store, StaticReplyModel(TEST_REPLY))


@pytest.fixture
def message_processor(reply_generator, mock_messaging_service, mock_logfire):
    """MessageProcessor wired to the recording messaging service."""
    return MessageProcessor(
        reply_generator=reply_generator,
        messaging_service=mock_messaging_service,
    )


# =============================================================================
# Payloads
# =============================================================================


@pytest.fixture
def messaging_payload():
    """Direct message delivery in the entry[].messaging[] layout."""
    return {
        "object": "instagram",
        "entry": [
            {
                "id": "17841400000000000",
                "time": 1727000000000,
                "messaging": [
                    {
                        "sender": {"id": "123"},
                        "recipient": {"id": "17841400000000000"},
                        "timestamp": 1727000000000,
                        "message": {"mid": "aWdfZAG1faXRlbToxOklH", "text": "hi"},
                    }
                ],
            }
        ],
    }


@pytest.fixture
def changes_payload():
    """Change notification delivery in the entry[].changes[] layout."""
    return {
        "object": "instagram",
        "entry": [
            {
                "id": "17841400000000000",
                "time": 1727000000,
                "changes": [
                    {
                        "field": "messages",
                        "value": {"sender_id": "456", "message": "hello there"},
                    }
                ],
            }
        ],
    }


# =============================================================================
# App
# =============================================================================


@pytest.fixture
def test_client(mock_settings, mock_logfire):
    """FastAPI TestClient with the application lifespan running."""
    from fastapi.testclient import TestClient

    from ig_relay.main import app

    with TestClient(app) as client:
        yield client


@pytest.fixture
def app_state(test_client, mock_messaging_service):
    """Application state with the outbound sender replaced by a recorder.

    Keeps the real reply generator and conversation store built at startup.
    """
    state = test_client.app.state
    state.message_processor = MessageProcessor(
        reply_generator=ReplyGenerator(
            state.conversation_store, StaticReplyModel(TEST_REPLY)
        ),
        messaging_service=mock_messaging_service,
    )
    return state
