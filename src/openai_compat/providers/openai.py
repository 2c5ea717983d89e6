"""OpenAI provider implementation."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing
from typing import Any

import httpx
from pydantic import ValidationError

from openai_compat.config import OpenAISettings
from openai_compat.convert import convert_args, fill_empty_content, legacy_args
from openai_compat.endpoints import get_endpoint
from openai_compat.errors import TransportError
from openai_compat.providers.base import BaseProvider
from openai_compat.routing import legacy_prompt, uses_legacy_completions
from openai_compat.sse import stream_sse
from openai_compat.types import (
    ApiType,
    ChatMessage,
    CompletionOptions,
    ModelList,
    ProviderConfig,
    WirePayload,
)

# Some self-hosted servers mark their last event with this finish reason and repeat the text.
_EOS_FINISH_REASON = "eos"


class OpenAIProvider(BaseProvider):
    """Streaming adapter for OpenAI-compatible completion and chat endpoints."""

    name = "openai"
    _logger = logging.getLogger(__name__)

    def __init__(
        self,
        config: ProviderConfig | None = None,
        *,
        api_key: str | None = None,
        api_base: str | None = None,
        api_type: ApiType | None = None,
        engine: str | None = None,
        api_version: str | None = None,
        use_legacy_completions_endpoint: bool | None = None,
        timeout_s: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        overrides = {
            "api_key": api_key,
            "api_base": api_base,
            "api_type": api_type,
            "engine": engine,
            "api_version": api_version,
            "use_legacy_completions_endpoint": use_legacy_completions_endpoint,
        }
        config = (config or ProviderConfig()).model_copy(
            update={k: v for k, v in overrides.items() if v is not None}
        )
        super().__init__(config, timeout_s=timeout_s, http_client=http_client)

    @classmethod
    def from_settings(
        cls, settings: OpenAISettings | None = None, *, http_client: httpx.AsyncClient | None = None
    ) -> OpenAIProvider:
        """Build a provider from ``OPENAI_*`` environment settings."""
        settings = settings or OpenAISettings()
        return cls(settings.to_config(), timeout_s=settings.timeout_s, http_client=http_client)

    def stream_chat(
        self, messages: Sequence[ChatMessage], options: CompletionOptions
    ) -> AsyncIterator[ChatMessage]:
        """Stream a reply, routing legacy-only models through ``completions``.

        Both routes yield ``ChatMessage`` chunks, so callers cannot tell them apart.
        """
        if uses_legacy_completions(options.model, self.config.use_legacy_completions_endpoint):
            self._logger.debug("Routing model %s to the legacy completions endpoint", options.model)
            return self._as_messages(self.legacy_stream_complete(legacy_prompt(messages), options))
        return self.chat_stream(messages, options)

    def legacy_stream_complete(self, prompt: str, options: CompletionOptions) -> AsyncIterator[str]:
        """Stream text fragments from the deprecated ``completions`` endpoint."""
        url = get_endpoint(self.config, "completions")
        payload = legacy_args(options, prompt, self.config.api_base)
        payload.stream = True

        async def _gen() -> AsyncIterator[str]:
            async with aclosing(self._stream_events(url, payload)) as events:
                async for event in events:
                    text = self._extract_legacy_text(event)
                    if text:
                        yield text

        return _gen()

    def chat_stream(
        self, messages: Sequence[ChatMessage], options: CompletionOptions
    ) -> AsyncIterator[ChatMessage]:
        """Stream message deltas from ``chat/completions``."""
        url = get_endpoint(self.config, "chat/completions")
        payload = convert_args(options, messages, self.config.api_base)
        payload.messages = fill_empty_content(payload.messages)
        payload.stream = True

        async def _gen() -> AsyncIterator[ChatMessage]:
            async with aclosing(self._stream_events(url, payload)) as events:
                async for event in events:
                    delta = self._extract_delta(event)
                    if delta is not None:
                        yield delta

        return _gen()

    async def list_models(self) -> list[str]:
        """Return the ids listed by ``GET models``."""
        url = get_endpoint(self.config, "models")
        try:
            response = await self._client.get(url, headers=self._auth_headers())
        except httpx.HTTPError as exc:
            raise TransportError(self.name, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise TransportError(
                self.name,
                response.text or response.reason_phrase,
                status_code=response.status_code,
            )
        try:
            models = ModelList.model_validate_json(response.content)
        except ValidationError as exc:
            raise TransportError(self.name, f"unexpected models response: {exc}") from exc
        return [m.id for m in models.data]

    async def _as_messages(self, texts: AsyncIterator[str]) -> AsyncIterator[ChatMessage]:
        async with aclosing(texts) as stream:
            async for text in stream:
                yield ChatMessage(role="assistant", content=text)

    async def _stream_events(self, url: str, payload: WirePayload) -> AsyncIterator[dict[str, Any]]:
        headers = {**self._auth_headers(), "Content-Type": "application/json"}
        self._logger.debug("POST %s (model=%s, stream=True)", url, payload.model)
        try:
            async with self._client.stream("POST", url, headers=headers, json=payload.to_wire()) as response:
                if not response.is_success:
                    body = await response.aread()
                    raise TransportError(
                        self.name,
                        body.decode(errors="replace") or response.reason_phrase,
                        status_code=response.status_code,
                    )

                async with aclosing(stream_sse(response, provider=self.name)) as events:
                    async for event in events:
                        yield event
        except httpx.HTTPError as exc:
            raise TransportError(self.name, str(exc) or type(exc).__name__) from exc

    @classmethod
    def _first_choice(cls, event: dict[str, Any]) -> dict[str, Any] | None:
        choices = event.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            cls._logger.debug("Skipping stream event without choices: %s", event)
            return None
        return choices[0]

    @classmethod
    def _extract_legacy_text(cls, event: dict[str, Any]) -> str:
        """Return the first choice's text unless the event is an end-of-stream marker."""
        choice = cls._first_choice(event)
        if choice is None:
            return ""
        if _EOS_FINISH_REASON in (choice.get("finish_reason"), event.get("finish_reason")):
            return ""
        text = choice.get("text")
        return text if isinstance(text, str) else ""

    @classmethod
    def _extract_delta(cls, event: dict[str, Any]) -> ChatMessage | None:
        """Return the first choice's delta when it carries content."""
        choice = cls._first_choice(event)
        if choice is None:
            return None
        delta = choice.get("delta")
        if not isinstance(delta, dict):
            return None
        content = delta.get("content")
        if not isinstance(content, str) or not content:
            return None
        return ChatMessage(role=delta.get("role") or "assistant", content=content)
