"""Reply generation backed by per-sender conversation history."""

from typing import Protocol

import logfire

from ig_relay.models.conversation import ConversationEntry
from ig_relay.services.conversation_store import ConversationStore


class ReplyModel(Protocol):
    """Protocol for anything that can write the next assistant turn.

    Implementations receive the full history, ending with the user message
    being answered, so a language model backend can use it as context.
    """

    async def complete(
        self, sender_id: str, history: list[ConversationEntry]
    ) -> str:
        ...


class StaticReplyModel:
    """ReplyModel that answers every message with the same text."""

    def __init__(self, text: str):
        if not text:
            raise ValueError("reply text is required")
        self._text = text

    async def complete(
        self, sender_id: str, history: list[ConversationEntry]
    ) -> str:
        return self._text


class ReplyGenerator:
    """Record a user message, produce a reply, and record the reply.

    Example:
        >>> generator = ReplyGenerator(InMemoryConversationStore(), StaticReplyModel("Hi!"))
        >>> await generator.respond("123", "hello")
        'Hi!'
    """

    def __init__(self, store: ConversationStore, model: ReplyModel):
        self._store = store
        self._model = model

    async def respond(self, sender_id: str, text: str) -> str:
        """Generate a reply for a sender's message.

        Args:
            sender_id: Instagram-scoped sender ID
            text: Message text sent by the user

        Returns:
            Reply text, already appended to the sender's history
        """
        self._store.append(sender_id, ConversationEntry(role="user", text=text))

        history = self._store.get(sender_id)
        reply = await self._model.complete(sender_id, history)

        self._store.append(sender_id, ConversationEntry(role="assistant", text=reply))

        logfire.info(
            "Reply generated",
            sender_id=sender_id,
            history_length=len(history) + 1,
            reply_length=len(reply),
        )
        return reply
