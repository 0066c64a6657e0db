"""Instagram webhook endpoints.

GET answers the subscription handshake. POST acknowledges every delivery
with 200 EVENT_RECEIVED once replies have been attempted, because Meta treats
any other status as a failed delivery and keeps retrying it. Malformed bodies
are logged and acknowledged rather than rejected.
"""

import json
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import PlainTextResponse

from ig_relay.config import get_settings
from ig_relay.constants import (
    EVENT_RECEIVED,
    SIGNATURE_HEADER,
    SUBSCRIBE_MODE,
    WEBHOOK_PLATFORM,
)
from ig_relay.services.event_extractor import extract_messages
from ig_relay.services.message_processor import MessageProcessor
from ig_relay.services.signature import verify_signature

logger = logging.getLogger(__name__)
router = APIRouter()


def get_processor(request: Request) -> MessageProcessor:
    """Message processor built by the application lifespan."""
    return request.app.state.message_processor


@router.get(f"/{WEBHOOK_PLATFORM}")
async def verify_webhook(request: Request):
    """Instagram webhook verification endpoint."""
    settings = get_settings()

    mode = request.query_params.get("hub.mode")
    token = request.query_params.get("hub.verify_token")
    challenge = request.query_params.get("hub.challenge", "")

    if mode == SUBSCRIBE_MODE and token == settings.verify_token:
        logger.info("Webhook verified successfully")
        return PlainTextResponse(challenge)

    logger.warning("Webhook verification failed (mode=%s)", mode)
    return Response(status_code=403)


@router.post(f"/{WEBHOOK_PLATFORM}")
async def handle_webhook(
    request: Request,
    processor: MessageProcessor = Depends(get_processor),
):
    """Handle incoming Instagram webhook events."""
    settings = get_settings()
    correlation_id = getattr(request.state, "correlation_id", None)
    body = await request.body()

    if settings.app_secret and not verify_signature(
        body, request.headers.get(SIGNATURE_HEADER), settings.app_secret
    ):
        logger.warning("Rejected webhook with invalid signature [%s]", correlation_id)
        return Response(status_code=403)

    try:
        payload = json.loads(body)
    except (ValueError, RecursionError) as e:
        logger.error("Error processing webhook event [%s]: %s", correlation_id, e)
        return PlainTextResponse(EVENT_RECEIVED)

    messages = extract_messages(payload)
    logger.info(
        "Webhook delivery with %d actionable message(s) [%s]",
        len(messages),
        correlation_id,
    )

    await processor.dispatch(messages)

    return PlainTextResponse(EVENT_RECEIVED)
