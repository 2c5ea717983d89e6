"""Package specific exception hierarchy."""


class OpenAICompatError(Exception):
    """Base exception for openai_compat package."""


class ConfigurationError(OpenAICompatError):
    """Raised when the provider configuration cannot produce a request."""


class TransportError(OpenAICompatError):
    """Represents HTTP failures, error responses and undecodable bodies."""

    def __init__(self, provider: str, message: str, status_code: int | None = None) -> None:
        suffix = f" (status {status_code})" if status_code is not None else ""
        super().__init__(f"{provider}: {message}{suffix}")
        self.provider = provider
        self.message = message
        self.status_code = status_code
