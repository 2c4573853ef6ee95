"""Supabase repository for promo codes."""

from dataclasses import dataclass

from supabase import Client

from culinary_studio.domain.models import PlanTier, PromoCode
from culinary_studio.services.promos import PromoRepository


@dataclass
class SupabasePromoRepository(PromoRepository):
    client: Client

    def get_code(self, code: str) -> PromoCode | None:
        response = (
            self.client.table("promo_codes")
            .select("*")
            .eq("code", code)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return PromoCode(
            code=row["code"],
            plan_to_grant=PlanTier(row["plan_to_grant"]),
            current_uses=int(row.get("current_uses") or 0),
            max_uses=int(row.get("max_uses") or 0),
        )

    def increment_use(self, code: str) -> None:
        """Bump the use counter through the database function."""
        self.client.rpc("increment_promo_use", {"promo_code": code}).execute()
