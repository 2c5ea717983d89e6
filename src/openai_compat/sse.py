"""Server-sent event decoding for streamed HTTP responses."""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from openai_compat.errors import TransportError

_logger = logging.getLogger(__name__)

_DONE = "[DONE]"


async def stream_sse(response: httpx.Response, *, provider: str = "openai") -> AsyncIterator[dict[str, Any]]:
    """Yield the JSON object carried by each ``data:`` line of ``response``.

    Stops at ``data: [DONE]`` or when the body ends. A ``data:`` line that is
    not valid JSON raises ``TransportError``.
    """
    async for line in response.aiter_lines():
        line = line.strip()
        if not line or line.startswith(":"):
            continue

        # "event:", "id:" and "retry:" fields carry nothing we use.
        if not line.startswith("data:"):
            continue

        data_str = line[len("data:") :].strip()
        if data_str == _DONE:
            return

        try:
            event = json.loads(data_str)
        except json.JSONDecodeError as exc:
            raise TransportError(provider, f"malformed stream event: {data_str!r}") from exc

        if not isinstance(event, dict):
            _logger.debug("Skipping non-object stream event: %s", data_str)
            continue
        yield event
