"""Domain models for the social feed."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum

TOP_WINDOW = timedelta(hours=72)
DEFAULT_CHEF_NAME = "Chef"
DEFAULT_POST_DIFFICULTY = "INTERMEDIATE"


class FeedTab(StrEnum):
    EXPLORE = "EXPLORE"
    FOLLOWING = "FOLLOWING"
    SAVED = "SAVED"


class ExploreFilter(StrEnum):
    NEW = "NEW"
    TOP = "TOP"


@dataclass(frozen=True)
class FeedPost:
    """Shared recipe as seen by one viewer."""

    id: str
    user_id: str
    recipe_id: str | None
    chef_name: str
    avatar_url: str | None
    title: str
    description: str
    difficulty: str
    image_url: str | None
    likes_count: int
    comments_count: int
    is_liked: bool
    is_saved: bool
    is_following: bool
    created_at: datetime | None = None
    recipe: dict[str, object] | None = None


@dataclass(frozen=True)
class Comment:
    """Comment on a post with its author's display fields."""

    id: str
    post_id: str
    user_id: str
    content: str
    user_name: str
    avatar_url: str | None
    created_at: datetime | None = None


@dataclass(frozen=True)
class FeedQuery:
    """Which slice of the feed to load."""

    tab: FeedTab = FeedTab.EXPLORE
    explore_filter: ExploreFilter = ExploreFilter.NEW
    search: str = ""


def search_posts(posts: list[FeedPost], query: str) -> list[FeedPost]:
    """Keep posts whose title or chef name contains the query."""
    needle = query.strip().lower()
    if not needle:
        return posts
    return [
        post
        for post in posts
        if needle in post.title.lower() or needle in post.chef_name.lower()
    ]
