"""Supabase repository for posts, reactions, follows and comments."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from culinary_studio.domain.social import (
    DEFAULT_CHEF_NAME,
    DEFAULT_POST_DIFFICULTY,
    Comment,
    FeedPost,
)
from culinary_studio.services.social import SocialRepository

_POST_COLUMNS = (
    "*, profiles:user_id(chef_name, avatar_url), "
    "likes:social_likes(user_id), saves:social_saves(user_id), "
    "comments_count:social_comments(count), recipe:recipe_id(*)"
)
_COMMENT_COLUMNS = "*, profiles:user_id(chef_name, avatar_url)"


@dataclass
class SupabaseSocialRepository(SocialRepository):
    """Supabase-backed community feed."""

    client: Client

    def list_posts(
        self,
        viewer_id: str | None,
        *,
        post_ids: list[str] | None = None,
        author_ids: list[str] | None = None,
        created_since: datetime | None = None,
    ) -> list[FeedPost]:
        """Return posts with an embedded recipe, as seen by ``viewer_id``."""
        query = self.client.table("social_posts").select(_POST_COLUMNS)
        if post_ids is not None:
            query = query.in_("id", post_ids)
        if author_ids is not None:
            query = query.in_("user_id", author_ids)
        if created_since is not None:
            query = query.gte("created_at", created_since.isoformat())
        else:
            query = query.order("created_at", desc=True)
        response = query.execute()
        following = set(self.following_ids(viewer_id)) if viewer_id else set()
        return [
            _parse_post(row, viewer_id, following)
            for row in response.data or []
            if row.get("recipe")
        ]

    def create_post(self, payload: dict[str, object]) -> None:
        response = self.client.table("social_posts").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to share recipe")

    def delete_recipe_posts(self, user_id: str, recipe_id: str) -> None:
        self.client.table("social_posts").delete().match(
            {"recipe_id": recipe_id, "user_id": user_id}
        ).execute()

    def shared_recipe_ids(self, user_id: str) -> set[str]:
        response = (
            self.client.table("social_posts")
            .select("recipe_id")
            .eq("user_id", user_id)
            .execute()
        )
        return {
            str(row["recipe_id"]) for row in response.data or [] if row.get("recipe_id")
        }

    def saved_post_ids(self, user_id: str) -> list[str]:
        response = (
            self.client.table("social_saves")
            .select("post_id")
            .eq("user_id", user_id)
            .execute()
        )
        return [str(row["post_id"]) for row in response.data or []]

    def following_ids(self, user_id: str) -> list[str]:
        response = (
            self.client.table("follows")
            .select("following_id")
            .eq("follower_id", user_id)
            .execute()
        )
        return [str(row["following_id"]) for row in response.data or []]

    def set_reaction(self, table: str, user_id: str, post_id: str, on: bool) -> None:
        row = {"post_id": post_id, "user_id": user_id}
        if on:
            self.client.table(table).insert(row).execute()
        else:
            self.client.table(table).delete().match(row).execute()

    def has_reaction(self, table: str, user_id: str, post_id: str) -> bool:
        response = (
            self.client.table(table)
            .select("post_id")
            .eq("post_id", post_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def follow(self, follower_id: str, following_id: str) -> None:
        self.client.table("follows").insert(
            {"follower_id": follower_id, "following_id": following_id}
        ).execute()

    def unfollow(self, follower_id: str, following_id: str) -> None:
        self.client.table("follows").delete().match(
            {"follower_id": follower_id, "following_id": following_id}
        ).execute()

    def list_comments(self, post_id: str) -> list[Comment]:
        response = (
            self.client.table("social_comments")
            .select(_COMMENT_COLUMNS)
            .eq("post_id", post_id)
            .order("created_at")
            .execute()
        )
        return [_parse_comment(row) for row in response.data or []]

    def add_comment(self, user_id: str, post_id: str, content: str) -> Comment:
        """Insert a comment, then read it back with its author fields."""
        inserted = (
            self.client.table("social_comments")
            .insert({"post_id": post_id, "user_id": user_id, "content": content})
            .execute()
        )
        if not inserted.data:
            raise RuntimeError("Failed to add comment")
        response = (
            self.client.table("social_comments")
            .select(_COMMENT_COLUMNS)
            .eq("id", inserted.data[0]["id"])
            .limit(1)
            .execute()
        )
        return _parse_comment((response.data or inserted.data)[0])


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_post(
    row: dict[str, object], viewer_id: str | None, following: set[str]
) -> FeedPost:
    profile = row.get("profiles") or {}
    likes = row.get("likes") or []
    saves = row.get("saves") or []
    counts = row.get("comments_count") or []
    return FeedPost(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        recipe_id=row.get("recipe_id"),
        chef_name=profile.get("chef_name") or DEFAULT_CHEF_NAME,
        avatar_url=profile.get("avatar_url"),
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        difficulty=str(row.get("difficulty") or DEFAULT_POST_DIFFICULTY),
        image_url=row.get("image_url"),
        likes_count=len(likes),
        comments_count=int(counts[0].get("count") or 0) if counts else 0,
        is_liked=any(like.get("user_id") == viewer_id for like in likes),
        is_saved=any(save.get("user_id") == viewer_id for save in saves),
        is_following=str(row["user_id"]) in following,
        created_at=_parse_timestamp(row.get("created_at")),
        recipe=row.get("recipe"),
    )


def _parse_comment(row: dict[str, object]) -> Comment:
    profile = row.get("profiles") or {}
    return Comment(
        id=str(row["id"]),
        post_id=str(row["post_id"]),
        user_id=str(row["user_id"]),
        content=str(row.get("content") or ""),
        user_name=profile.get("chef_name") or DEFAULT_CHEF_NAME,
        avatar_url=profile.get("avatar_url"),
        created_at=_parse_timestamp(row.get("created_at")),
    )
