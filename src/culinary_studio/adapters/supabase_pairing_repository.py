"""Supabase repository for saved pairings."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from culinary_studio.domain.pairing import SavedPairing
from culinary_studio.services.pairings import PairingRepository


@dataclass
class SupabasePairingRepository(PairingRepository):
    client: Client

    def create_pairing(self, payload: dict[str, object]) -> SavedPairing:
        response = self.client.table("pairings").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to save pairing")
        return _parse_pairing(response.data[0])

    def list_pairings(self, user_id: str) -> list[SavedPairing]:
        response = (
            self.client.table("pairings")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_pairing(row) for row in response.data or []]

    def get_pairing(self, user_id: str, pairing_id: str) -> SavedPairing | None:
        response = (
            self.client.table("pairings")
            .select("*")
            .eq("id", pairing_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_pairing(response.data[0])

    def delete_pairing(self, user_id: str, pairing_id: str) -> None:
        (
            self.client.table("pairings")
            .delete()
            .eq("id", pairing_id)
            .eq("user_id", user_id)
            .execute()
        )


def _parse_pairing(row: dict[str, object]) -> SavedPairing:
    created_raw = row.get("created_at")
    return SavedPairing(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        project_id=row.get("project_id"),
        title=str(row.get("title") or ""),
        ingredients=list(row.get("ingredients") or []),
        analysis=dict(row.get("analysis") or {}),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
