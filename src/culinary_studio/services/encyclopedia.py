"""Encyclopedia articles and the saved topics library."""

import logging
from dataclasses import dataclass
from typing import Protocol

from supabase import PostgrestAPIError

from culinary_studio.domain.encyclopedia import (
    Article,
    Topic,
    find_topic,
    placeholder_article,
)
from culinary_studio.errors import NotFoundError

logger = logging.getLogger(__name__)


class EncyclopediaRepository(Protocol):
    """Persistence interface for articles and saved topics."""

    def get_article(self, topic_id: str) -> Article | None:
        """Return the stored article of a topic, if any."""

    def saved_topic_ids(self, user_id: str) -> list[str]:
        """Return ids of the topics a user saved."""

    def set_saved(self, user_id: str, topic_id: str, saved: bool) -> None:
        """Insert or delete a saved topic row."""


@dataclass
class EncyclopediaService:
    repository: EncyclopediaRepository

    def topic(self, topic_id: str) -> Topic:
        topic = find_topic(topic_id)
        if topic is None:
            raise NotFoundError(f"Topic {topic_id} not found")
        return topic

    def article(self, topic_id: str) -> Article:
        """Return the article of a topic, or its placeholder."""
        topic = self.topic(topic_id)
        try:
            article = self.repository.get_article(topic_id)
        except (PostgrestAPIError, RuntimeError):
            logger.exception("Failed to load article %s", topic_id)
            article = None
        return article or placeholder_article(topic)

    def library(self, user_id: str) -> list[Topic]:
        """Return the user's saved topics; empty when the store fails."""
        try:
            saved_ids = self.repository.saved_topic_ids(user_id)
        except (PostgrestAPIError, RuntimeError):
            logger.exception("Failed to load saved topics")
            return []
        return [topic for topic_id in saved_ids if (topic := find_topic(topic_id))]

    def toggle_saved(self, user_id: str, topic_id: str) -> bool:
        """Flip whether a topic is saved and return the new state."""
        self.topic(topic_id)
        saved = topic_id not in self.repository.saved_topic_ids(user_id)
        self.repository.set_saved(user_id, topic_id, saved)
        return saved
