"""Domain models for assistant chat and direct messages."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

ASSISTANT_FALLBACK = "I'm not sure how to answer that."


class MessageRole(StrEnum):
    USER = "user"
    CHEF = "chef"
    BOT = "bot"


@dataclass(frozen=True)
class DirectMessage:
    """Row of the messages table."""

    id: str
    sender_id: str
    receiver_id: str | None
    text: str
    is_ai: bool = False
    created_at: datetime | None = None


@dataclass(frozen=True)
class ChatLine:
    """Message as shown in a conversation."""

    role: MessageRole
    text: str
    sender_id: str | None = None


@dataclass(frozen=True)
class ChefContact:
    """Another chef the user can message."""

    id: str
    chef_name: str
    full_name: str
    avatar_url: str | None = None


def conversation_line(message: DirectMessage, viewer_id: str) -> ChatLine:
    """Show the viewer's own messages as user lines, the rest as chef lines."""
    role = MessageRole.USER if message.sender_id == viewer_id else MessageRole.CHEF
    return ChatLine(role=role, text=message.text, sender_id=message.sender_id)
