"""Pure conversions from provider-agnostic messages/options to wire payloads."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from openai_compat.types import (
    ChatMessage,
    ChatPayload,
    CompletionOptions,
    ContentPart,
    ImagePart,
    LegacyPayload,
    TextPart,
)

# Jan listens on :1337 and errors on more than four stop sequences instead of truncating.
_JAN_PORT_MARKER = ":1337"
_JAN_MAX_STOP = 4

_IMAGE_DETAIL = "low"


def convert_message(message: ChatMessage) -> dict[str, Any]:
    """Serialize one message; image parts are sent with low detail."""
    data = message.model_dump(exclude={"content"})
    if isinstance(message.content, str):
        data["content"] = message.content
        return data

    parts: list[dict[str, Any]] = []
    for part in message.content:
        if isinstance(part, ImagePart):
            image_url = part.image_url.model_dump(exclude_none=True)
            image_url["detail"] = _IMAGE_DETAIL
            parts.append({"type": "image_url", "image_url": image_url})
        else:
            parts.append({"type": "text", "text": part.text})
    data["content"] = parts
    return data


def _stop_sequences(options: CompletionOptions, api_base: str | None) -> list[str] | None:
    if options.stop is None:
        return None
    if api_base and _JAN_PORT_MARKER in api_base:
        return list(options.stop[:_JAN_MAX_STOP])
    return list(options.stop)


def _option_fields(options: CompletionOptions, api_base: str | None) -> dict[str, Any]:
    return {
        "model": options.model,
        "max_tokens": options.max_tokens,
        "temperature": options.temperature,
        "top_p": options.top_p,
        "frequency_penalty": options.frequency_penalty,
        "presence_penalty": options.presence_penalty,
        "stop": _stop_sequences(options, api_base),
    }


def convert_args(
    options: CompletionOptions,
    messages: Sequence[ChatMessage],
    api_base: str | None,
) -> ChatPayload:
    """Build the ``chat/completions`` body for the given messages."""
    return ChatPayload(
        messages=[convert_message(m) for m in messages],
        **_option_fields(options, api_base),
    )


def legacy_args(options: CompletionOptions, prompt: str, api_base: str | None) -> LegacyPayload:
    """Build the ``completions`` body; ``prompt`` replaces ``messages``."""
    return LegacyPayload(prompt=prompt, **_option_fields(options, api_base))


def fill_empty_content(wire_messages: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    """Return copies of the messages with ``""`` content replaced by a single space.

    LM Studio rejects messages whose content is empty.
    """
    return [{**m, "content": " " if m.get("content") == "" else m.get("content")} for m in wire_messages]


def strip_images(content: str | Sequence[ContentPart]) -> str:
    """Reduce message content to its text, dropping image parts."""
    if isinstance(content, str):
        return content
    return "\n".join(part.text for part in content if isinstance(part, TextPart))
