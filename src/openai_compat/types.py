"""Provider-agnostic request models and OpenAI wire payload records."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

ApiType = Literal["openai", "azure"]
Endpoint = Literal["chat/completions", "completions", "models"]

DEFAULT_API_BASE = "https://api.openai.com/v1/"


class ImageURL(BaseModel):
    """Image reference as accepted by vision-capable chat models."""

    url: str
    detail: str | None = None


class TextPart(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImagePart(BaseModel):
    type: Literal["image_url"] = "image_url"
    image_url: ImageURL


ContentPart = Annotated[Union[TextPart, ImagePart], Field(discriminator="type")]


class ChatMessage(BaseModel):
    """Single chat message; content is plain text or an ordered list of parts."""

    role: str
    content: str | list[ContentPart]


class CompletionOptions(BaseModel):
    """Sampling options for one call."""

    model_config = ConfigDict(frozen=True)

    model: str
    max_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None
    stop: tuple[str, ...] | None = None


class ProviderConfig(BaseModel):
    """Connection settings read by the provider for every call."""

    model_config = ConfigDict(frozen=True)

    api_base: str | None = DEFAULT_API_BASE
    api_key: str | None = None
    api_type: ApiType = "openai"
    engine: str | None = None
    api_version: str | None = None
    use_legacy_completions_endpoint: bool = False


class _WirePayload(BaseModel):
    model: str
    max_tokens: int | None = None
    temperature: float | None = None
    top_p: float | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None
    stop: list[str] | None = None
    stream: bool | None = None

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON body, leaving out options that were not set."""
        return self.model_dump(exclude_none=True)


class ChatPayload(_WirePayload):
    """Body for ``chat/completions``."""

    kind: Literal["chat"] = Field(default="chat", exclude=True)
    messages: list[dict[str, Any]]


class LegacyPayload(_WirePayload):
    """Body for the deprecated single-prompt ``completions`` endpoint."""

    kind: Literal["legacy"] = Field(default="legacy", exclude=True)
    prompt: str


WirePayload = Union[ChatPayload, LegacyPayload]


class ModelInfo(BaseModel):
    """Entry of the ``data`` array returned by ``GET models``."""

    id: str
    owned_by: str | None = None


class ModelList(BaseModel):
    """Body of ``GET models``."""

    data: list[ModelInfo]
