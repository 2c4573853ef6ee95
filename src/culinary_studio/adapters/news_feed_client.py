"""HTTPX client for the RSS-to-JSON proxy."""

from dataclasses import dataclass

import httpx

from culinary_studio.domain.news import NewsFeed
from culinary_studio.services.news import NewsClient


@dataclass
class HttpxNewsClient(NewsClient):
    """Fetches feeds converted to JSON by the proxy."""

    proxy_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, proxy_url: str) -> "HttpxNewsClient":
        """Create a news client with a managed httpx session."""
        return cls(proxy_url=proxy_url, http_client=httpx.AsyncClient())

    async def fetch_feed(self, feed_url: str) -> NewsFeed:
        response = await self.http_client.get(
            self.proxy_url,
            params={"rss_url": feed_url},
            timeout=15,
        )
        response.raise_for_status()
        return NewsFeed.model_validate(response.json())

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
