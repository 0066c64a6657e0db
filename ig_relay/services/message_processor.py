"""Message processing orchestration service.

The webhook handler focuses on HTTP concerns while MessageProcessor handles,
for each extracted message:
- Generating a reply (which records both turns in the conversation store)
- Sending the reply through the messaging service
- Logging delivery failures without re-raising them

Delivery is best effort: one attempt per message, no retry, no re-queue.
"""

from __future__ import annotations

import asyncio
import logging

import httpx
import logfire

from ig_relay.config import Settings
from ig_relay.models.instagram import InboundMessage
from ig_relay.services.conversation_store import ConversationStore
from ig_relay.services.messaging_protocol import (
    MessagingService,
    get_messaging_service,
)
from ig_relay.services.reply_generator import ReplyGenerator, StaticReplyModel

logger = logging.getLogger(__name__)


class MessageProcessor:
    """Reply to extracted messages, one task per message.

    Example:
        >>> processor = MessageProcessor(
        ...     reply_generator=ReplyGenerator(store, StaticReplyModel("Hi!")),
        ...     messaging_service=MockMessagingService(),
        ... )
        >>> await processor.dispatch([InboundMessage(sender_id="123", text="hi")])
        1
    """

    def __init__(
        self,
        reply_generator: ReplyGenerator,
        messaging_service: MessagingService,
    ):
        self._reply_generator = reply_generator
        self._messaging_service = messaging_service

    async def process(self, message: InboundMessage) -> bool:
        """Generate and send the reply to a single message.

        Args:
            message: Message extracted from a webhook delivery

        Returns:
            True if the reply was delivered, False if any step failed
        """
        try:
            reply = await self._reply_generator.respond(
                message.sender_id, message.text
            )
            await self._messaging_service.send_message(
                recipient_id=message.sender_id,
                text=reply,
            )
        except httpx.HTTPError as e:
            logger.error(
                "Failed to send message to %s: %s", message.sender_id, e
            )
            return False
        except Exception as e:
            logger.error(
                "Error processing message from %s: %s",
                message.sender_id,
                e,
                exc_info=True,
            )
            return False

        logfire.info(
            "Replied to sender",
            sender_id=message.sender_id,
            message_id=message.message_id,
            source=message.source,
        )
        return True

    async def dispatch(self, messages: list[InboundMessage]) -> int:
        """Process messages concurrently and wait for every attempt.

        Each message runs in its own task. Completion order is not
        guaranteed and a failure in one task never affects the others.

        Args:
            messages: Messages extracted from one webhook delivery

        Returns:
            Number of replies delivered
        """
        if not messages:
            return 0

        tasks = [asyncio.create_task(self.process(message)) for message in messages]
        results = await asyncio.gather(*tasks)
        delivered = sum(1 for ok in results if ok)

        logfire.info(
            "Webhook messages dispatched",
            message_count=len(messages),
            delivered_count=delivered,
        )
        return delivered


def get_message_processor(
    settings: Settings,
    store: ConversationStore,
    messaging_service: MessagingService | None = None,
) -> MessageProcessor:
    """Factory function to build the application's MessageProcessor.

    Args:
        settings: Application settings (credentials and reply text)
        store: Conversation store owned by the application
        messaging_service: Optional messaging service (for testing)

    Returns:
        Configured MessageProcessor instance
    """
    return MessageProcessor(
        reply_generator=ReplyGenerator(store, StaticReplyModel(settings.reply_text)),
        messaging_service=messaging_service
        or get_messaging_service(settings.access_token, settings.ig_id),
    )
