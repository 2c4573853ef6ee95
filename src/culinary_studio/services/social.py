"""Social feed, reactions, follows and comments."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from supabase import PostgrestAPIError

from culinary_studio.domain.social import (
    TOP_WINDOW,
    Comment,
    ExploreFilter,
    FeedPost,
    FeedQuery,
    FeedTab,
    search_posts,
)
from culinary_studio.errors import InvalidRequestError

logger = logging.getLogger(__name__)


class SocialRepository(Protocol):
    """Persistence interface for the social tables."""

    def list_posts(
        self,
        viewer_id: str | None,
        *,
        post_ids: list[str] | None = None,
        author_ids: list[str] | None = None,
        created_since: datetime | None = None,
    ) -> list[FeedPost]:
        """Return posts with counts; newest first unless ``created_since`` is set."""

    def create_post(self, payload: dict[str, object]) -> None:
        """Insert a post for a shared recipe."""

    def delete_recipe_posts(self, user_id: str, recipe_id: str) -> None:
        """Delete the posts sharing one of the user's recipes."""

    def shared_recipe_ids(self, user_id: str) -> set[str]:
        """Return ids of the user's shared recipes."""

    def saved_post_ids(self, user_id: str) -> list[str]:
        """Return ids of posts the user saved."""

    def following_ids(self, user_id: str) -> list[str]:
        """Return ids of chefs the user follows."""

    def set_reaction(self, table: str, user_id: str, post_id: str, on: bool) -> None:
        """Insert or delete a like or save row."""

    def has_reaction(self, table: str, user_id: str, post_id: str) -> bool:
        """Return whether a like or save row exists."""

    def follow(self, follower_id: str, following_id: str) -> None:
        """Insert a follow row."""

    def unfollow(self, follower_id: str, following_id: str) -> None:
        """Delete a follow row."""

    def list_comments(self, post_id: str) -> list[Comment]:
        """Return comments of a post, oldest first."""

    def add_comment(self, user_id: str, post_id: str, content: str) -> Comment:
        """Insert a comment and return it with author fields."""


LIKES_TABLE = "social_likes"
SAVES_TABLE = "social_saves"


@dataclass
class SocialService:
    """Application service for the community feed."""

    repository: SocialRepository

    def feed(
        self,
        viewer_id: str | None,
        query: FeedQuery,
        now: datetime | None = None,
    ) -> list[FeedPost]:
        """Load a feed tab; store failures give an empty feed."""
        try:
            posts = self._load(viewer_id, query, now or datetime.now(tz=UTC))
        except (PostgrestAPIError, RuntimeError):
            logger.exception("Failed to load %s feed", query.tab.value)
            return []
        return search_posts(posts, query.search)

    def _load(
        self, viewer_id: str | None, query: FeedQuery, now: datetime
    ) -> list[FeedPost]:
        post_ids: list[str] | None = None
        author_ids: list[str] | None = None
        if viewer_id and query.tab == FeedTab.SAVED:
            post_ids = self.repository.saved_post_ids(viewer_id)
            if not post_ids:
                return []
        if viewer_id and query.tab == FeedTab.FOLLOWING:
            author_ids = self.repository.following_ids(viewer_id)
            if not author_ids:
                return []
        top = query.explore_filter == ExploreFilter.TOP
        posts = self.repository.list_posts(
            viewer_id,
            post_ids=post_ids,
            author_ids=author_ids,
            created_since=now - TOP_WINDOW if top else None,
        )
        if top:
            posts = sorted(posts, key=lambda post: post.likes_count, reverse=True)
        return posts

    def toggle_like(self, user_id: str, post_id: str) -> bool:
        """Flip the like of a post and return the new state."""
        return self._toggle(LIKES_TABLE, user_id, post_id)

    def toggle_save(self, user_id: str, post_id: str) -> bool:
        """Flip the save of a post and return the new state."""
        return self._toggle(SAVES_TABLE, user_id, post_id)

    def _toggle(self, table: str, user_id: str, post_id: str) -> bool:
        active = not self.repository.has_reaction(table, user_id, post_id)
        self.repository.set_reaction(table, user_id, post_id, on=active)
        return active

    def follow(self, user_id: str, chef_id: str) -> None:
        if user_id == chef_id:
            raise InvalidRequestError("You cannot follow yourself")
        self.repository.follow(user_id, chef_id)

    def unfollow(self, user_id: str, chef_id: str) -> None:
        self.repository.unfollow(user_id, chef_id)

    def following(self, user_id: str) -> list[str]:
        """Return followed chef ids; empty when the store fails."""
        try:
            return self.repository.following_ids(user_id)
        except (PostgrestAPIError, RuntimeError):
            logger.exception("Failed to load follows")
            return []

    def comments(self, post_id: str) -> list[Comment]:
        return self.repository.list_comments(post_id)

    def add_comment(self, user_id: str, post_id: str, content: str) -> Comment:
        text = content.strip()
        if not text:
            raise InvalidRequestError("Comment cannot be empty")
        return self.repository.add_comment(user_id, post_id, text)
