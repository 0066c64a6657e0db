"""Send messages through the Instagram Graph API."""

import time
from typing import Any

import httpx
import logfire

from ig_relay.config import get_settings
from ig_relay.constants import MAX_LOGGED_RESPONSE_BODY_CHARS
from ig_relay.models.instagram import OutboundMessage


def build_messages_url(ig_id: str) -> str:
    """Send-message endpoint for an Instagram account."""
    settings = get_settings()
    return (
        f"https://{settings.instagram_graph_host}/"
        f"{settings.instagram_api_version}/{ig_id}/messages"
    )


def _client_options() -> dict[str, Any]:
    settings = get_settings()
    # Without an explicit timeout httpx applies its own default
    if settings.instagram_api_timeout_seconds is None:
        return {}
    return {"timeout": settings.instagram_api_timeout_seconds}


async def send_message(
    access_token: str,
    ig_id: str,
    recipient_id: str,
    text: str,
) -> None:
    """
    Send a text message via the Instagram Graph API.

    A single request is made; failures are logged and re-raised for the
    caller to handle.

    Args:
        access_token: Instagram user access token (sent as a Bearer credential)
        ig_id: Instagram professional account ID that sends the message
        recipient_id: Instagram-scoped ID of the recipient
        text: Message text to send

    Raises:
        httpx.HTTPStatusError: The API answered with a non-2xx status
        httpx.RequestError: The request could not be completed
    """
    start_time = time.time()
    url = build_messages_url(ig_id)

    logfire.info(
        "Sending Instagram message",
        recipient_id=recipient_id,
        message_length=len(text),
        url=url,
    )

    headers = {"Authorization": f"Bearer {access_token}"}
    payload = OutboundMessage.text_reply(recipient_id, text).model_dump()

    try:
        async with httpx.AsyncClient(**_client_options()) as client:
            response = await client.post(url, headers=headers, json=payload)
            elapsed = time.time() - start_time

            response.raise_for_status()

            logfire.info(
                "Instagram message sent successfully",
                recipient_id=recipient_id,
                status_code=response.status_code,
                response_time_ms=elapsed * 1000,
            )
    except httpx.HTTPStatusError as e:
        elapsed = time.time() - start_time
        logfire.error(
            "Instagram API HTTP error",
            recipient_id=recipient_id,
            status_code=e.response.status_code,
            response_body=e.response.text[:MAX_LOGGED_RESPONSE_BODY_CHARS],
            error=str(e),
            error_type=type(e).__name__,
            response_time_ms=elapsed * 1000,
        )
        raise
    except httpx.RequestError as e:
        elapsed = time.time() - start_time
        logfire.error(
            "Instagram API request error",
            recipient_id=recipient_id,
            error=str(e),
            error_type=type(e).__name__,
            response_time_ms=elapsed * 1000,
        )
        raise
