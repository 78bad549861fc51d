"""
Domain models for the chat surface.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

__all__ = [
    "MessageRole",
    "ChatMessage",
    "IncomingMessage",
]


class MessageRole(str, Enum):
    """Author of a chat message."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatMessage(BaseModel):
    """A persisted chat message, used as agent conversation history."""

    user_id: str = Field(..., description="Chat user id")
    message_id: str = Field(..., description="Telegram message id")
    text: str = Field(..., description="Message text")
    role: MessageRole = Field(..., description="Who wrote the message")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("user_id", "message_id", "text")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field cannot be empty")
        return v

    def to_history(self) -> dict:
        """Format as an LLM chat message."""
        return {"role": self.role.value, "content": self.text}


class IncomingMessage(BaseModel):
    """The part of an inbound Telegram message the bot consumes."""

    message_id: str
    chat_id: int
    text: str = ""
    first_name: Optional[str] = None

    @classmethod
    def from_update(cls, update: dict) -> "IncomingMessage":
        """Build from a Telegram webhook update body.

        Raises:
            ValueError: If the update carries no message
        """
        message = update.get("message")
        if not message:
            raise ValueError("Update does not contain a message")
        chat = message.get("chat") or {}
        return cls(
            message_id=str(message["message_id"]),
            chat_id=chat["id"],
            text=message.get("text") or "",
            first_name=chat.get("first_name"),
        )

    @property
    def user_id(self) -> str:
        """Private chats use the chat id as the user id."""
        return str(self.chat_id)
