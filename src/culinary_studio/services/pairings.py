"""Ingredient pairing analysis and saved pairings."""

from dataclasses import dataclass
from typing import Protocol

from culinary_studio.domain.audio import SpeechAudio
from culinary_studio.domain.pairing import (
    MIN_PAIRING_INGREDIENTS,
    PairingAnalysis,
    SavedPairing,
    distinct_ingredients,
    pairing_title,
)
from culinary_studio.errors import InvalidRequestError, NotFoundError
from culinary_studio.locales import ai_language_name
from culinary_studio.services.assistant import AssistantService


class PairingRepository(Protocol):
    """Persistence interface for saved pairings."""

    def create_pairing(self, payload: dict[str, object]) -> SavedPairing:
        """Insert a pairing and return it."""

    def list_pairings(self, user_id: str) -> list[SavedPairing]:
        """Return the user's pairings, newest first."""

    def get_pairing(self, user_id: str, pairing_id: str) -> SavedPairing | None:
        """Return one of the user's pairings, if present."""

    def delete_pairing(self, user_id: str, pairing_id: str) -> None:
        """Delete one of the user's pairings."""


@dataclass
class PairingService:
    """Application service for the pairing lab."""

    repository: PairingRepository
    assistant: AssistantService

    async def analyze(
        self, ingredients: list[str], language: str, deep: bool = False
    ) -> PairingAnalysis:
        """Analyze at least two distinct ingredients."""
        cleaned = distinct_ingredients(ingredients)
        if len(cleaned) < MIN_PAIRING_INGREDIENTS:
            raise InvalidRequestError("Add at least two different ingredients")
        return await self.assistant.analyze_pairing(
            cleaned, ai_language_name(language), deep
        )

    async def speak(self, analysis: PairingAnalysis) -> SpeechAudio | None:
        """Read the detailed explanation aloud."""
        return await self.assistant.speak(analysis.detailed_explanation)

    def save(
        self,
        user_id: str,
        ingredients: list[str],
        analysis: PairingAnalysis,
        name: str | None = None,
    ) -> SavedPairing:
        """Store an analysis as returned by the assistant."""
        return self.repository.create_pairing(
            {
                "user_id": user_id,
                "title": pairing_title(ingredients, name),
                "ingredients": list(ingredients),
                "analysis": analysis.model_dump(by_alias=True, exclude_none=True),
            }
        )

    def list_pairings(self, user_id: str) -> list[SavedPairing]:
        return self.repository.list_pairings(user_id)

    def get_pairing(self, user_id: str, pairing_id: str) -> SavedPairing:
        pairing = self.repository.get_pairing(user_id, pairing_id)
        if pairing is None:
            raise NotFoundError(f"Pairing {pairing_id} not found")
        return pairing

    def delete(self, user_id: str, pairing_id: str) -> None:
        self.repository.delete_pairing(user_id, pairing_id)
