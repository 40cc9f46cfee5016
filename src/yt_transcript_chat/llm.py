"""Language model capability and its OpenAI implementation."""

import logging
from abc import ABC, abstractmethod

from openai import AsyncOpenAI

from yt_transcript_chat.errors import ConfigurationMissing

logger = logging.getLogger(__name__)


class LLMClient(ABC):
    @abstractmethod
    async def complete(
        self,
        messages: list[dict],
        max_tokens: int,
        temperature: float,
    ) -> str | None:
        """Return the model's reply to ``messages``, or None if it produced nothing."""
        ...

    async def close(self) -> None:
        """Clean up resources."""


class OpenAIClient(LLMClient):
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        base_url: str | None = None,
        timeout: float = 60.0,
    ):
        self.model = model
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        if not self._api_key:
            raise ConfigurationMissing("OPENAI_API_KEY not configured")
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

    async def complete(
        self,
        messages: list[dict],
        max_tokens: int,
        temperature: float,
    ) -> str | None:
        client = self._get_client()
        logger.debug(f"Requesting {self.model} completion, max_tokens={max_tokens}")
        response = await client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
