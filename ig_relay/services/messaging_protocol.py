"""Messaging abstraction protocols for decoupling from the Instagram API.

This module provides a Protocol-based abstraction for outbound messaging,
allowing the message processor to:
- Mock messaging in tests without httpx mocking
- Receive its messaging service through dependency injection
"""

from typing import Protocol


class MessagingService(Protocol):
    """Protocol for sending replies.

    Implementations raise on delivery failure; the caller decides whether to
    log, retry or drop.
    """

    async def send_message(self, recipient_id: str, text: str) -> None:
        """Send message to recipient.

        Args:
            recipient_id: Platform-specific user identifier
            text: Message text to send
        """
        ...


class InstagramMessagingService:
    """Instagram implementation of MessagingService.

    Binds the account ID and access token so callers only supply the
    recipient and text.

    Example:
        >>> service = InstagramMessagingService(access_token="...", ig_id="1784...")
        >>> await service.send_message("user123", "Hello!")
    """

    def __init__(self, access_token: str, ig_id: str):
        """Initialize with Instagram credentials.

        Args:
            access_token: Instagram user access token for API calls
            ig_id: Instagram professional account ID that sends replies
        """
        if not access_token:
            raise ValueError("access_token is required")
        if not ig_id:
            raise ValueError("ig_id is required")
        self._token = access_token
        self._ig_id = ig_id

    async def send_message(self, recipient_id: str, text: str) -> None:
        """Send message via the Instagram Graph API.

        Raises:
            httpx.HTTPStatusError: Non-2xx response
            httpx.RequestError: Transport failure
        """
        from ig_relay.services.instagram_service import send_message

        await send_message(
            access_token=self._token,
            ig_id=self._ig_id,
            recipient_id=recipient_id,
            text=text,
        )


class MockMessagingService:
    """Mock implementation for testing.

    Allows tests to verify messaging behavior without making real API calls.

    Example:
        >>> service = MockMessagingService()
        >>> await service.send_message("user123", "Test message")
        >>> service.sent_messages
        [('user123', 'Test message')]
    """

    def __init__(self, error: Exception | None = None):
        """Initialize mock service.

        Args:
            error: Exception raised by every send_message call, if given
        """
        self._error = error
        self.sent_messages: list[tuple[str, str]] = []

    async def send_message(self, recipient_id: str, text: str) -> None:
        """Record the attempt, then raise the configured error if any."""
        self.sent_messages.append((recipient_id, text))
        if self._error is not None:
            raise self._error


def get_messaging_service(access_token: str, ig_id: str) -> InstagramMessagingService:
    """Factory function to get a MessagingService implementation.

    Args:
        access_token: Instagram user access token
        ig_id: Instagram professional account ID

    Returns:
        MessagingService implementation (currently Instagram)
    """
    return InstagramMessagingService(access_token=access_token, ig_id=ig_id)
