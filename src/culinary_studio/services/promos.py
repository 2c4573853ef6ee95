"""Promotional codes redeemed at sign-up."""

from dataclasses import dataclass
from typing import Protocol

from culinary_studio.domain.models import PromoCode
from culinary_studio.errors import InvalidRequestError


class PromoRepository(Protocol):
    """Persistence interface for promo codes."""

    def get_code(self, code: str) -> PromoCode | None:
        """Return a promo code by its upper-case value."""

    def increment_use(self, code: str) -> None:
        """Count one more use of a code."""


@dataclass
class PromoService:
    repository: PromoRepository

    def verify(self, code: str) -> PromoCode:
        """Return a usable promo code or raise."""
        normalized = code.strip().upper()
        promo = self.repository.get_code(normalized) if normalized else None
        if promo is None or promo.exhausted:
            raise InvalidRequestError("Invalid or expired code")
        return promo

    def redeem(self, promo: PromoCode) -> None:
        self.repository.increment_use(promo.code)
