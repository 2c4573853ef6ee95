"""Supabase repository for the profiles table."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from culinary_studio.domain.models import ProfileRecord
from culinary_studio.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    client: Client

    def get_profile(self, user_id: str) -> ProfileRecord | None:
        response = (
            self.client.table("profiles")
            .select("*")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def upsert_profile(self, payload: dict[str, object]) -> ProfileRecord | None:
        """Insert the row, replacing one with the same id."""
        response = (
            self.client.table("profiles")
            .upsert(payload, on_conflict="id")
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def update_profile(self, user_id: str, payload: dict[str, object]) -> None:
        self.client.table("profiles").update(payload).eq("id", user_id).execute()

    def list_profiles(
        self, exclude_user_id: str | None = None
    ) -> list[ProfileRecord]:
        query = self.client.table("profiles").select("*")
        if exclude_user_id:
            query = query.neq("id", exclude_user_id)
        response = query.execute()
        return [_parse_profile(row) for row in response.data or []]


def _parse_profile(row: dict[str, object]) -> ProfileRecord:
    requested_raw = row.get("deletion_requested_at")
    return ProfileRecord(
        id=str(row["id"]),
        username=row.get("username"),
        full_name=row.get("full_name"),
        chef_name=row.get("chef_name"),
        bio=row.get("bio"),
        avatar_url=row.get("avatar_url"),
        tier=row.get("tier"),
        deletion_requested_at=(
            datetime.fromisoformat(requested_raw)
            if isinstance(requested_raw, str) and requested_raw
            else None
        ),
    )
