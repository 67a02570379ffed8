"""Thin wrapper around the OpenAI chat completions API.

One client is built at startup and shared by every request; the key does not
change while the process runs.
"""

import logging
from typing import Any

from openai import AsyncOpenAI

from config import Settings

logger = logging.getLogger(__name__)


class CompletionClient:
    """Requests JSON-object completions for a fixed model."""

    def __init__(self, api_key: str, model: str, base_url: str | None = None, client: Any = None):
        self.model = model
        self._client = client or AsyncOpenAI(api_key=api_key, base_url=base_url)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionClient | None":
        """Build the shared client, or ``None`` when no API key is configured."""
        if not settings.has_api_key:
            return None
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url or None,
        )

    async def complete_json(self, system: str, user: str, temperature: float) -> str:
        """Send a system/user prompt pair and return the raw reply text.

        Exceptions from the SDK propagate unchanged; callers map them.
        An empty reply comes back as ``"{}"``.
        """
        completion = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            temperature=temperature,
            response_format={"type": "json_object"},
        )
        if not completion.choices:
            return "{}"
        return completion.choices[0].message.content or "{}"

    async def close(self) -> None:
        await self._client.close()
