"""Studio blog news, cached behind the RSS proxy."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import ValidationError

from culinary_studio.domain.news import NEWS_ITEM_LIMIT, NewsFeed, NewsItem
from culinary_studio.services.cache import Cache

logger = logging.getLogger(__name__)

NEWS_CACHE_KEY = "news:items"


class NewsClient(Protocol):
    async def fetch_feed(self, feed_url: str) -> NewsFeed:
        """Fetch a feed converted to JSON."""


@dataclass
class NewsService:
    client: NewsClient
    cache: Cache
    feed_url: str
    ttl_seconds: int

    async def latest(self) -> list[NewsItem]:
        """Return the newest items; empty when the feed is unavailable."""
        cached = self.cache.get(NEWS_CACHE_KEY)
        if isinstance(cached, list):
            return cached
        try:
            feed = await self.client.fetch_feed(self.feed_url)
        except (httpx.HTTPError, ValidationError, ValueError):
            logger.exception("Failed to fetch news feed")
            return []
        if feed.status != "ok":
            logger.warning("News feed returned status %s", feed.status)
            return []
        items = feed.items[:NEWS_ITEM_LIMIT]
        self.cache.set(NEWS_CACHE_KEY, items, self.ttl_seconds)
        return items
