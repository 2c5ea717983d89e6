"""Environment-driven settings for building a ProviderConfig."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from openai_compat.types import DEFAULT_API_BASE, ApiType, ProviderConfig


class OpenAISettings(BaseSettings):
    """Reads ``OPENAI_*`` variables (and ``.env``) into provider settings."""

    model_config = SettingsConfigDict(env_prefix="OPENAI_", env_file=".env", extra="ignore")

    api_key: str | None = None
    api_base: str | None = DEFAULT_API_BASE
    api_type: ApiType = "openai"
    engine: str | None = None
    api_version: str | None = None
    use_legacy_completions_endpoint: bool = False
    timeout_s: float = 60.0

    def to_config(self) -> ProviderConfig:
        return ProviderConfig(
            api_base=self.api_base,
            api_key=self.api_key,
            api_type=self.api_type,
            engine=self.engine,
            api_version=self.api_version,
            use_legacy_completions_endpoint=self.use_legacy_completions_endpoint,
        )
