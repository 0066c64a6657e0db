"""Conversation history models."""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationEntry(BaseModel):
    """One message in a sender's conversation history."""

    role: Literal["user", "assistant"] = Field(..., description="Who wrote the text")
    text: str = Field(..., description="Message text")
    timestamp: datetime = Field(
        default_factory=_utcnow, description="When the entry was recorded (UTC)"
    )
