"""Model classification deciding between the chat and legacy completion schemas."""

from __future__ import annotations

from collections.abc import Sequence

from openai_compat.convert import strip_images
from openai_compat.types import ChatMessage

# Models only served by the legacy ``completions`` endpoint.
NON_CHAT_MODELS: frozenset[str] = frozenset(
    {
        "text-davinci-002",
        "text-davinci-003",
        "code-davinci-002",
        "text-ada-001",
        "text-babbage-001",
        "text-curie-001",
        "davinci",
        "curie",
        "babbage",
        "ada",
    }
)

# Models that reject ``completions``; the legacy flag never applies to them.
CHAT_ONLY_MODELS: frozenset[str] = frozenset(
    {
        "gpt-3.5-turbo",
        "gpt-3.5-turbo-0613",
        "gpt-3.5-turbo-16k",
        "gpt-4",
        "gpt-35-turbo-16k",
        "gpt-35-turbo-0613",
        "gpt-35-turbo",
        "gpt-4-32k",
        "gpt-4-turbo-preview",
        "gpt-4-vision",
        "gpt-4-0125-preview",
        "gpt-4-1106-preview",
    }
)


def uses_legacy_completions(
    model: str,
    use_legacy_endpoint: bool,
    *,
    chat_only: frozenset[str] = CHAT_ONLY_MODELS,
    non_chat: frozenset[str] = NON_CHAT_MODELS,
) -> bool:
    """Return True when ``model`` must be sent to the legacy endpoint.

    Chat-only membership wins over everything; otherwise non-chat membership
    or the caller's flag selects the legacy endpoint. Unknown models default
    to chat.
    """
    if model in chat_only:
        return False
    return model in non_chat or use_legacy_endpoint


def legacy_prompt(messages: Sequence[ChatMessage]) -> str:
    """Collapse a conversation into the single prompt the legacy schema accepts."""
    if not messages:
        return ""
    return strip_images(messages[-1].content)
