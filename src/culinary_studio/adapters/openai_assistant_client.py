"""OpenAI client for structured analysis, chat and speech."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from culinary_studio.errors import AssistantUnavailableError
from culinary_studio.services.assistant import AssistantClient


@dataclass
class OpenAIAssistantClient(AssistantClient):
    """Assistant backed by the Responses and speech APIs.

    The SDK client is created on first use, so a missing key only fails the
    AI features.
    """

    api_key: str | None
    client: AsyncOpenAI | None = None

    @classmethod
    def create(cls, api_key: str | None) -> "OpenAIAssistantClient":
        return cls(api_key=api_key)

    def _client(self) -> AsyncOpenAI:
        if self.client is None:
            if not self.api_key:
                raise AssistantUnavailableError(
                    "AI features are unavailable: OPENAI_API_KEY is not configured"
                )
            self.client = AsyncOpenAI(api_key=self.api_key)
        return self.client

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
        """Call the Responses API with a strict JSON schema."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": prompt,
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if instructions:
            request_payload["instructions"] = instructions
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self._client().responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)

    async def complete_text(
        self,
        *,
        model: str,
        store: bool,
        instructions: str | None,
        prompt: str,
    ) -> str:
        request_payload: dict[str, object] = {
            "model": model,
            "input": prompt,
            "store": store,
        }
        if instructions:
            request_payload["instructions"] = instructions
        response = await self._client().responses.create(**request_payload)
        return response.output_text or ""

    async def synthesize_speech(self, *, model: str, voice: str, text: str) -> bytes:
        """Return raw 24 kHz mono 16-bit PCM."""
        response = await self._client().audio.speech.create(
            model=model,
            voice=voice,
            input=text,
            response_format="pcm",
        )
        return response.content

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()
