"""Supabase repository for encyclopedia articles and saved topics."""

from dataclasses import dataclass

from supabase import Client

from culinary_studio.domain.encyclopedia import (
    PLACEHOLDER_AUTHOR,
    PLACEHOLDER_READING_TIME,
    Article,
)
from culinary_studio.services.encyclopedia import EncyclopediaRepository


@dataclass
class SupabaseEncyclopediaRepository(EncyclopediaRepository):
    client: Client

    def get_article(self, topic_id: str) -> Article | None:
        response = (
            self.client.table("culinary_encyclopedia")
            .select("*")
            .eq("topic_id", topic_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return Article(
            topic_id=topic_id,
            content=str(row.get("content") or ""),
            reading_time=str(row.get("reading_time") or PLACEHOLDER_READING_TIME),
            author=str(row.get("author") or PLACEHOLDER_AUTHOR),
        )

    def saved_topic_ids(self, user_id: str) -> list[str]:
        response = (
            self.client.table("user_saved_topics")
            .select("topic_id")
            .eq("user_id", user_id)
            .execute()
        )
        return [str(row["topic_id"]) for row in response.data or []]

    def set_saved(self, user_id: str, topic_id: str, saved: bool) -> None:
        row = {"user_id": user_id, "topic_id": topic_id}
        if saved:
            self.client.table("user_saved_topics").insert(row).execute()
        else:
            self.client.table("user_saved_topics").delete().match(row).execute()
