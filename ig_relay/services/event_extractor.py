"""Extract actionable messages from Instagram webhook payloads.

Instagram delivers events in two layouts:

- ``entry[].messaging[]`` for direct messages, with the sender under
  ``sender.id`` and the text under ``message.text``.
- ``entry[].changes[]`` for field change notifications, where the sender and
  text may live under ``from.id`` or ``value.sender_id`` and ``value.message``.

Events that lack either a sender or a text are skipped without failing the
rest of the delivery.
"""

import logging
from typing import Any

from ig_relay.models.instagram import InboundMessage

logger = logging.getLogger(__name__)


def _get_path(data: Any, *keys: str) -> Any:
    """Walk nested dicts, returning None as soon as a level is missing."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def _as_identifier(value: Any) -> str | None:
    # bool is a subclass of int and never a valid ID
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value) if value else None
    if isinstance(value, str) and value:
        return value
    return None


def _as_text(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def extract_sender_id(event: dict[str, Any]) -> str | None:
    """Locate the sender ID, trying each known layout in order."""
    for path in (("sender", "id"), ("from", "id"), ("value", "sender_id")):
        sender_id = _as_identifier(_get_path(event, *path))
        if sender_id:
            return sender_id
    return None


def extract_text(event: dict[str, Any]) -> str | None:
    """Locate the message text, trying each known layout in order."""
    for path in (("message", "text"), ("value", "message")):
        text = _as_text(_get_path(event, *path))
        if text:
            return text
    return None


def _entry_events(entry: dict[str, Any]) -> tuple[str, list[Any]]:
    if entry.get("messaging") is not None:
        source, events = "messaging", entry["messaging"]
    elif entry.get("changes") is not None:
        source, events = "changes", entry["changes"]
    else:
        return "messaging", []

    if not isinstance(events, list):
        logger.warning(
            "Ignoring non-list %s collection in entry %s", source, entry.get("id")
        )
        return source, []
    return source, events


def extract_messages(payload: Any) -> list[InboundMessage]:
    """Return every (sender, text) pair found in a webhook payload.

    Args:
        payload: Decoded JSON body of a webhook delivery

    Returns:
        Extracted messages in payload order; empty if nothing is actionable
    """
    entries = payload.get("entry") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        return []

    messages: list[InboundMessage] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue

        source, events = _entry_events(entry)
        for event in events:
            if not isinstance(event, dict):
                continue

            sender_id = extract_sender_id(event)
            text = extract_text(event)
            if not (sender_id and text):
                logger.debug("Skipping %s event without sender or text", source)
                continue

            messages.append(
                InboundMessage(
                    sender_id=sender_id,
                    text=text,
                    source=source,
                    message_id=_as_identifier(_get_path(event, "message", "mid")),
                )
            )

    return messages
