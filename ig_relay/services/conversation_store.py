"""Conversation history storage.

The store maps an Instagram-scoped sender ID to the ordered history of that
sender's conversation. Using a Protocol keeps the reply generator independent
of where history lives, so a persistent backend can replace the in-memory one
without touching callers.
"""

from typing import Protocol

from ig_relay.models.conversation import ConversationEntry


class ConversationStore(Protocol):
    """Protocol for reading and appending conversation history."""

    def get(self, sender_id: str) -> list[ConversationEntry]:
        """Return the history for a sender, oldest first.

        Args:
            sender_id: Instagram-scoped sender ID

        Returns:
            A copy of the history; empty if the sender is unknown
        """
        ...

    def append(self, sender_id: str, entry: ConversationEntry) -> None:
        """Append an entry to a sender's history, creating it if absent."""
        ...


class InMemoryConversationStore:
    """Process-lifetime ConversationStore backed by a dict.

    Histories grow without bound and are lost when the process exits. All
    access happens on the event loop thread, so no lock is taken.

    Example:
        >>> store = InMemoryConversationStore()
        >>> store.append("123", ConversationEntry(role="user", text="hi"))
        >>> [e.text for e in store.get("123")]
        ['hi']
    """

    def __init__(self) -> None:
        self._conversations: dict[str, list[ConversationEntry]] = {}

    def get(self, sender_id: str) -> list[ConversationEntry]:
        return list(self._conversations.get(sender_id, []))

    def append(self, sender_id: str, entry: ConversationEntry) -> None:
        self._conversations.setdefault(sender_id, []).append(entry)

    def senders(self) -> list[str]:
        """Sender IDs in order of first contact."""
        return list(self._conversations)

    def __contains__(self, sender_id: object) -> bool:
        return sender_id in self._conversations

    def __len__(self) -> int:
        return len(self._conversations)
