"""LLM provider factory."""

from ..config import Config
from .base import LLMProvider
from .openrouter import OpenRouterProvider


def get_llm_provider(config: Config, api_key: str) -> LLMProvider:
    """Create the classification provider for a resolved API key."""
    return OpenRouterProvider(
        api_key=api_key,
        model=config.model,
        timeout=config.fetch_timeout,
    )
