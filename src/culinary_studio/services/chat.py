"""Assistant chat and direct messages between chefs."""

import logging
from dataclasses import dataclass
from typing import Protocol

from supabase import PostgrestAPIError

from culinary_studio.domain.messages import (
    ChatLine,
    ChefContact,
    DirectMessage,
    MessageRole,
    conversation_line,
)
from culinary_studio.errors import InvalidRequestError
from culinary_studio.services.assistant import AssistantService
from culinary_studio.services.profiles import ProfileService

logger = logging.getLogger(__name__)


class MessageRepository(Protocol):
    """Persistence interface for the messages table."""

    def insert_message(self, payload: dict[str, object]) -> DirectMessage:
        """Insert a message and return it."""

    def conversation(self, user_id: str, other_id: str) -> list[DirectMessage]:
        """Return messages between two users, oldest first."""


@dataclass
class ChatService:
    """Application service for the chat panel."""

    repository: MessageRepository
    assistant: AssistantService
    profiles: ProfileService

    async def ask_ai(self, question: str, user_id: str | None = None) -> ChatLine:
        """Answer a question; signed-in questions are stored first."""
        text = question.strip()
        if not text:
            raise InvalidRequestError("Message cannot be empty")
        if user_id:
            try:
                self.repository.insert_message(
                    {"sender_id": user_id, "text": text, "is_ai": True}
                )
            except (PostgrestAPIError, RuntimeError):
                logger.warning("Failed to store assistant question for %s", user_id)
        answer = await self.assistant.culinary_advice(text)
        return ChatLine(role=MessageRole.BOT, text=answer)

    def chefs(self, user_id: str) -> list[ChefContact]:
        return self.profiles.list_chefs(user_id)

    def history(self, user_id: str, chef_id: str) -> list[ChatLine]:
        return [
            conversation_line(message, user_id)
            for message in self.repository.conversation(user_id, chef_id)
        ]

    def send(self, user_id: str, chef_id: str, text: str) -> ChatLine:
        """Send a direct message to another chef."""
        body = text.strip()
        if not body:
            raise InvalidRequestError("Message cannot be empty")
        message = self.repository.insert_message(
            {
                "sender_id": user_id,
                "receiver_id": chef_id,
                "text": body,
                "is_ai": False,
            }
        )
        return conversation_line(message, user_id)
