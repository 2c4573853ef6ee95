"""Supabase repository for chat messages."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from culinary_studio.domain.messages import DirectMessage
from culinary_studio.services.chat import MessageRepository


@dataclass
class SupabaseMessageRepository(MessageRepository):
    client: Client

    def insert_message(self, payload: dict[str, object]) -> DirectMessage:
        response = self.client.table("messages").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to send message")
        return parse_message(response.data[0])

    def conversation(self, user_id: str, other_id: str) -> list[DirectMessage]:
        """Return both directions of a conversation, oldest first."""
        response = (
            self.client.table("messages")
            .select("*")
            .or_(
                f"and(sender_id.eq.{user_id},receiver_id.eq.{other_id}),"
                f"and(sender_id.eq.{other_id},receiver_id.eq.{user_id})"
            )
            .order("created_at")
            .execute()
        )
        return [parse_message(row) for row in response.data or []]


def parse_message(row: dict[str, object]) -> DirectMessage:
    """Build a message from a row of the messages table."""
    created_raw = row.get("created_at")
    receiver = row.get("receiver_id")
    return DirectMessage(
        id=str(row["id"]),
        sender_id=str(row["sender_id"]),
        receiver_id=str(receiver) if receiver else None,
        text=str(row.get("text") or ""),
        is_ai=bool(row.get("is_ai")),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
