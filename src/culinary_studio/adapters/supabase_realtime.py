"""Realtime subscription to message inserts through Supabase."""

import logging
from dataclasses import dataclass
from typing import Any

from supabase import AsyncClient, acreate_client

from culinary_studio.adapters.supabase_message_repository import parse_message
from culinary_studio.services.realtime import MessageCallback, RealtimeGateway

logger = logging.getLogger(__name__)


def _inserted_row(payload: dict[str, Any]) -> dict[str, Any] | None:
    row = payload.get("new")
    if row is None:
        row = (payload.get("data") or {}).get("record")
    return row


@dataclass
class SupabaseRealtimeGateway(RealtimeGateway):
    """Opens one realtime channel per inbox on a lazily created async client."""

    url: str
    key: str
    client: AsyncClient | None = None

    async def _client(self) -> AsyncClient:
        if self.client is None:
            self.client = await acreate_client(self.url, self.key)
        return self.client

    async def subscribe_inserts(
        self, receiver_id: str, callback: MessageCallback
    ) -> object:
        """Deliver message inserts addressed to ``receiver_id``."""

        def _on_insert(payload: dict[str, Any]) -> None:
            row = _inserted_row(payload)
            if row is None:
                logger.warning("Realtime payload without a record")
                return
            callback(parse_message(row))

        client = await self._client()
        channel = client.channel(f"chat:{receiver_id}")
        channel.on_postgres_changes(
            "INSERT",
            schema="public",
            table="messages",
            filter=f"receiver_id=eq.{receiver_id}",
            callback=_on_insert,
        )
        await channel.subscribe()
        return channel

    async def unsubscribe(self, handle: object) -> None:
        client = await self._client()
        await client.remove_channel(handle)

    async def close(self) -> None:
        """Drop every channel still open."""
        if self.client is not None:
            await self.client.remove_all_channels()
