"""Generative AI features: pairing analysis, advice, optimization and speech."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

from openai import OpenAIError
from pydantic import ValidationError

from culinary_studio.domain.audio import SpeechAudio
from culinary_studio.domain.costing import CostIngredient, CostTemplate
from culinary_studio.domain.messages import ASSISTANT_FALLBACK
from culinary_studio.domain.pairing import (
    OptimizationKind,
    OptimizationSuggestion,
    PairingAnalysis,
)
from culinary_studio.errors import AssistantUnavailableError

logger = logging.getLogger(__name__)

CHEF_INSTRUCTIONS = (
    "You are a world-class professional chef assistant. Provide practical, "
    "accurate culinary advice. Be concise but helpful."
)

_STRING = {"type": "string"}
_STRING_LIST = {"type": "array", "items": _STRING}

_BASE_PAIRING_PROPERTIES: dict[str, object] = {
    "compatibilityScore": {"type": "number", "minimum": 0, "maximum": 100},
    "flavorProfile": _STRING_LIST,
    "detailedExplanation": _STRING,
    "suggestedDishes": {
        "type": "array",
        "items": {
            "type": "object",
            "properties": {"name": _STRING, "difficulty": _STRING},
            "required": ["name", "difficulty"],
            "additionalProperties": False,
        },
    },
}

_DEEP_PAIRING_PROPERTIES: dict[str, object] = {
    "complexity": _STRING,
    "intensity": _STRING,
    "recommendedRatio": _STRING,
    "sources": _STRING_LIST,
    "physicochemicalInfo": _STRING,
    "complementaryIngredients": _STRING_LIST,
    "tips": _STRING_LIST,
    "thingsToAvoid": _STRING_LIST,
    "historicalContext": _STRING,
}

OPTIMIZATION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "suggestions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "title": _STRING,
                    "current": _STRING,
                    "recommendation": _STRING,
                    "impact": _STRING,
                },
                "required": ["title", "current", "recommendation", "impact"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["suggestions"],
    "additionalProperties": False,
}


def pairing_schema(deep: bool) -> dict[str, object]:
    """Return the structured-output schema of a pairing analysis."""
    properties = dict(_BASE_PAIRING_PROPERTIES)
    if deep:
        properties.update(_DEEP_PAIRING_PROPERTIES)
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties),
        "additionalProperties": False,
    }


def pairing_prompt(ingredients: list[str], language: str, deep: bool) -> str:
    """Build the pairing analysis prompt."""
    lines = [
        f"Analyze the culinary pairing of: {', '.join(ingredients)}.",
        f"The entire response must be in {language}.",
        "Return a JSON response with:",
        "- compatibilityScore (number 0-100)",
        "- flavorProfile (array of strings)",
        "- detailedExplanation (around 100 words)",
    ]
    if deep:
        example = " / ".join(
            f"{name} {share}%"
            for name, share in zip(ingredients[:2], (60, 40), strict=False)
        )
        lines += [
            "- complexity (Low, Medium or High)",
            "- intensity (Subtle, Balanced or Pungent)",
            "- recommendedRatio (the exact percentage for EVERY ingredient, "
            f'for example "{example}")',
            "- sources (culinary or scientific references)",
            "- physicochemicalInfo (scientific explanation of the pairing)",
            "- complementaryIngredients (other ingredients that complement it)",
            "- tips (culinary tips)",
            "- thingsToAvoid (common mistakes or clashing ingredients)",
            "- historicalContext (historical or cultural relevance, if any)",
        ]
    lines.append("- suggestedDishes (array of objects with name and difficulty)")
    return "\n".join(lines)


def optimization_prompt(
    ingredients: list[CostIngredient], kind: OptimizationKind
) -> str:
    """Build the prompt asking for three improvements to a cost sheet."""
    if kind == OptimizationKind.NUTRITIONAL:
        rows = [
            {"name": row.name, "qty": row.quantity, "unit": row.unit}
            for row in ingredients
        ]
        goal = (
            "nutritional optimization",
            "improve nutrition (higher protein, lower fat, or more fiber)",
        )
    else:
        rows = [
            {
                "name": row.name,
                "qty": row.quantity,
                "unit": row.unit,
                "price": row.unit_price,
            }
            for row in ingredients
        ]
        goal = (
            "cost optimization",
            "reduce total cost (bulk buy, supplier switch, or ingredient swap)",
        )
    return (
        f"Review this recipe ingredient list for {goal[0]}:\n"
        f"{json.dumps(rows)}\n"
        f"Provide 3 suggestions to {goal[1]}.\n"
        "Return suggestions with title, current, recommendation, impact."
    )


def optimization_kind(template: CostTemplate) -> OptimizationKind:
    """Nutritional sheets get nutrition advice, every other sheet cost advice."""
    if template == CostTemplate.NUTRITIONAL:
        return OptimizationKind.NUTRITIONAL
    return OptimizationKind.ECONOMIC


class AssistantClient(Protocol):
    """Interface for the generative AI API."""

    async def complete_json(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        instructions: str | None,
        prompt: str,
        schema_name: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Return a structured completion matching ``schema``."""

    async def complete_text(
        self,
        *,
        model: str,
        store: bool,
        instructions: str | None,
        prompt: str,
    ) -> str:
        """Return a free-text completion."""

    async def synthesize_speech(self, *, model: str, voice: str, text: str) -> bytes:
        """Return 24 kHz mono 16-bit PCM audio for ``text``."""


@dataclass
class AssistantService:
    """Prepares AI prompts and applies the failure policy of each feature."""

    client: AssistantClient
    model: str
    chat_model: str
    reasoning_effort: str | None
    store: bool
    tts_model: str
    tts_voice: str

    async def analyze_pairing(
        self, ingredients: list[str], language: str, deep: bool = False
    ) -> PairingAnalysis:
        """Analyze an ingredient pairing; failures propagate to the caller.

        Malformed model output is reported as a ``RuntimeError`` carrying the
        parser's message.
        """
        try:
            raw = await self.client.complete_json(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                instructions=None,
                prompt=pairing_prompt(ingredients, language, deep),
                schema_name="pairing_analysis",
                schema=pairing_schema(deep),
            )
            return PairingAnalysis.model_validate(raw)
        except ValueError as exc:
            raise RuntimeError(f"Failed to analyze pairing: {exc}") from exc

    async def culinary_advice(self, message: str) -> str:
        """Answer a cooking question, or return the fallback text."""
        try:
            answer = await self.client.complete_text(
                model=self.chat_model,
                store=self.store,
                instructions=CHEF_INSTRUCTIONS,
                prompt=message,
            )
        except (AssistantUnavailableError, OpenAIError, RuntimeError):
            logger.exception("Culinary advice request failed")
            return ASSISTANT_FALLBACK
        return answer.strip() or ASSISTANT_FALLBACK

    async def optimize(
        self, ingredients: list[CostIngredient], template: CostTemplate
    ) -> list[OptimizationSuggestion]:
        """Return improvement suggestions for a sheet; empty on failure."""
        kind = optimization_kind(template)
        try:
            raw = await self.client.complete_json(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                instructions=None,
                prompt=optimization_prompt(ingredients, kind),
                schema_name=f"{kind.value}_optimization",
                schema=OPTIMIZATION_SCHEMA,
            )
            suggestions = raw.get("suggestions", [])
            return [
                OptimizationSuggestion.model_validate({**item, "type": kind})
                for item in suggestions
                if isinstance(item, dict)
            ]
        except (
            AssistantUnavailableError,
            OpenAIError,
            RuntimeError,
            ValidationError,
            ValueError,
        ):
            logger.exception("%s optimization failed", kind.value)
            return []

    async def speak(self, text: str) -> SpeechAudio | None:
        """Read ``text`` aloud; None when speech is unavailable."""
        if not text.strip():
            return None
        try:
            pcm = await self.client.synthesize_speech(
                model=self.tts_model, voice=self.tts_voice, text=text
            )
        except (AssistantUnavailableError, OpenAIError, RuntimeError):
            logger.exception("Speech synthesis failed")
            return None
        if not pcm:
            return None
        return SpeechAudio(pcm=pcm)
