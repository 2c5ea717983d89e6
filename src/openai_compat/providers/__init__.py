"""Provider definitions for openai_compat."""

from .base import BaseProvider
from .openai import OpenAIProvider

__all__ = [
    "BaseProvider",
    "OpenAIProvider",
]
