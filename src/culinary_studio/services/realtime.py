"""Fan-out of realtime message inserts to in-process consumers."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol
from uuid import uuid4

from culinary_studio.domain.messages import DirectMessage

logger = logging.getLogger(__name__)

MessageCallback = Callable[[DirectMessage], None]


class RealtimeGateway(Protocol):
    """Subscription to message inserts on the realtime bus."""

    async def subscribe_inserts(
        self, receiver_id: str, callback: MessageCallback
    ) -> object:
        """Start delivering inserts addressed to ``receiver_id``; return a handle."""

    async def unsubscribe(self, handle: object) -> None:
        """Stop a subscription started by ``subscribe_inserts``."""


@dataclass
class Subscription:
    """A consumer's bounded view of the inbox."""

    queue: asyncio.Queue[DirectMessage]
    _on_close: Callable[["Subscription"], None]
    closed: bool = False

    async def get(self) -> DirectMessage:
        return await self.queue.get()

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            self._on_close(self)


@dataclass
class MessageBus:
    """Delivers messages to every subscriber of a channel.

    Each subscriber has a bounded queue. When it is full the oldest message
    is dropped.
    """

    queue_size: int = 100
    _subscribers: dict[str, list[Subscription]] = field(default_factory=dict)

    def subscribe(self, channel: str) -> Subscription:
        subscription = Subscription(
            queue=asyncio.Queue(maxsize=self.queue_size),
            _on_close=lambda sub: self._remove(channel, sub),
        )
        self._subscribers.setdefault(channel, []).append(subscription)
        return subscription

    def publish(self, channel: str, message: DirectMessage) -> None:
        for subscription in self._subscribers.get(channel, []):
            queue = subscription.queue
            if queue.full():
                queue.get_nowait()
                logger.warning(
                    "Inbox queue full on %s, dropped oldest message", channel
                )
            queue.put_nowait(message)

    def subscriber_count(self, channel: str) -> int:
        return len(self._subscribers.get(channel, []))

    def close_all(self, channel: str) -> None:
        for subscription in list(self._subscribers.get(channel, [])):
            subscription.close()

    def _remove(self, channel: str, subscription: Subscription) -> None:
        subscribers = self._subscribers.get(channel, [])
        if subscription in subscribers:
            subscribers.remove(subscription)
        if not subscribers:
            self._subscribers.pop(channel, None)


def _new_channel() -> str:
    return uuid4().hex


@dataclass
class RealtimeInbox:
    """One realtime subscription per login session, fanned out through the bus.

    Consumers are registered on the inbox's own channel, so two logins of
    the same user never see each other's deliveries.
    """

    user_id: str
    bus: MessageBus
    gateway: RealtimeGateway
    channel: str = field(default_factory=_new_channel)
    _handle: object | None = None

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    async def open(self) -> None:
        if self._handle is None:
            self._handle = await self.gateway.subscribe_inserts(
                self.user_id, self._deliver
            )
            logger.info("Realtime inbox opened for %s", self.user_id)

    def subscribe(self) -> Subscription:
        return self.bus.subscribe(self.channel)

    async def close(self) -> None:
        """Unsubscribe from the realtime bus and drop this inbox's consumers."""
        handle, self._handle = self._handle, None
        if handle is not None:
            await self.gateway.unsubscribe(handle)
            logger.info("Realtime inbox closed for %s", self.user_id)
        self.bus.close_all(self.channel)

    def _deliver(self, message: DirectMessage) -> None:
        self.bus.publish(self.channel, message)
