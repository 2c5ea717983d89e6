"""Endpoint URL resolution for OpenAI and Azure OpenAI deployments."""

from __future__ import annotations

import httpx

from openai_compat.errors import ConfigurationError
from openai_compat.types import Endpoint, ProviderConfig


def get_endpoint(config: ProviderConfig, endpoint: Endpoint) -> str:
    """Return the absolute URL of ``endpoint`` for this configuration.

    Azure deployments are addressed as
    ``{api_base}openai/deployments/{engine}/{endpoint}?api-version={api_version}``;
    everything else is ``{api_base}{endpoint}``. Paths are resolved relative to
    ``api_base``, so the base should end with ``/``.
    """
    if not config.api_base:
        raise ConfigurationError(
            "No API base URL provided. Please set the 'api_base' option in the provider config."
        )

    if config.api_type == "azure":
        if not config.engine or not config.api_version:
            raise ConfigurationError("Azure deployments require the 'engine' and 'api_version' options.")
        relative = f"openai/deployments/{config.engine}/{endpoint}?api-version={config.api_version}"
    else:
        relative = endpoint

    return str(httpx.URL(config.api_base).join(relative))
