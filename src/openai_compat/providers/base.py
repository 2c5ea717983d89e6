"""Provider base class: configuration, HTTP client and derived completions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing

import httpx

from openai_compat.convert import strip_images
from openai_compat.types import ChatMessage, CompletionOptions, ProviderConfig


class BaseProvider(ABC):
    """Abstract base class for provider implementations."""

    name: str

    def __init__(
        self,
        config: ProviderConfig,
        *,
        timeout_s: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self._client = http_client or httpx.AsyncClient(timeout=timeout_s)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> BaseProvider:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _auth_headers(self) -> dict[str, str]:
        api_key = self.config.api_key or ""
        # "api-key" is how Azure OpenAI authenticates; other servers ignore it.
        return {
            "Authorization": f"Bearer {api_key}",
            "api-key": api_key,
        }

    @abstractmethod
    def stream_chat(
        self, messages: Sequence[ChatMessage], options: CompletionOptions
    ) -> AsyncIterator[ChatMessage]:
        """Yield assistant message deltas for the conversation."""
        raise NotImplementedError

    @abstractmethod
    async def list_models(self) -> list[str]:
        """Return the model identifiers the server offers."""
        raise NotImplementedError

    async def complete(self, prompt: str, options: CompletionOptions) -> str:
        """Send ``prompt`` as a user message and return the whole reply."""
        completion = ""
        async with aclosing(self.stream_chat([ChatMessage(role="user", content=prompt)], options)) as stream:
            async for chunk in stream:
                completion += strip_images(chunk.content)
        return completion

    async def stream_complete(self, prompt: str, options: CompletionOptions) -> AsyncIterator[str]:
        """Yield the text of each reply chunk for a single user ``prompt``."""
        async with aclosing(self.stream_chat([ChatMessage(role="user", content=prompt)], options)) as stream:
            async for chunk in stream:
                yield strip_images(chunk.content)
