"""AI provider module."""

from item_factory.services.ai.base import AIProvider
from item_factory.services.ai.factory import get_ai_provider
from item_factory.services.ai.gemini import GeminiProvider
from item_factory.services.ai.mock import MockProvider
from item_factory.services.ai.ollama_provider import OllamaProvider

__all__ = [
    "AIProvider",
    "GeminiProvider",
    "MockProvider",
    "OllamaProvider",
    "get_ai_provider",
]
