"""Incoming/outgoing Instagram messaging models."""

from typing import Literal

from pydantic import BaseModel, Field


class InboundMessage(BaseModel):
    """Actionable message extracted from a webhook delivery."""

    sender_id: str = Field(..., description="Instagram-scoped sender ID (IGSID)")
    text: str = Field(..., min_length=1, description="Message text")
    source: Literal["messaging", "changes"] = Field(
        default="messaging", description="Entry collection the event came from"
    )
    message_id: str | None = Field(
        default=None, description="Platform message ID (mid), when present"
    )


class Recipient(BaseModel):
    id: str


class MessageBody(BaseModel):
    text: str


class OutboundMessage(BaseModel):
    """Send API request body."""

    recipient: Recipient
    message: MessageBody

    @classmethod
    def text_reply(cls, recipient_id: str, text: str) -> "OutboundMessage":
        return cls(recipient=Recipient(id=recipient_id), message=MessageBody(text=text))
