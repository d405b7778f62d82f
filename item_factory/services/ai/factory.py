"""Factory for creating AI provider instances."""

from typing import Optional

from item_factory.config import settings
from item_factory.core.logging import get_logger
from item_factory.services.ai.base import AIProvider
from item_factory.services.ai.gemini import DEFAULT_GEMINI_MODEL, GeminiProvider
from item_factory.services.ai.mock import MockProvider
from item_factory.services.ai.ollama_provider import (
    DEFAULT_OLLAMA_MODEL,
    OllamaProvider,
)

logger = get_logger(__name__)


def get_ai_provider(provider_name: Optional[str] = None) -> AIProvider:
    """Get an AI provider instance.

    Args:
        provider_name: Optional provider name. If not specified,
                      uses AI_PROVIDER from config.

    Returns:
        An AIProvider instance. Misconfigured or unknown providers fall
        back to MockProvider.
    """
    name = (provider_name or settings.AI_PROVIDER).lower()

    if name == "mock":
        logger.debug("Using MockProvider")
        return MockProvider()

    if name == "gemini":
        if settings.AI_API_KEY:
            model = settings.AI_MODEL or DEFAULT_GEMINI_MODEL
            logger.debug("Using GeminiProvider with model: %s", model)
            return GeminiProvider(api_key=settings.AI_API_KEY, model=model)
        else:
            logger.warning("AI_API_KEY not set, falling back to MockProvider")
            return MockProvider()

    if name == "ollama":
        model = settings.AI_MODEL or DEFAULT_OLLAMA_MODEL
        logger.debug("Using OllamaProvider with model: %s", model)
        return OllamaProvider(model=model, host=settings.AI_BASE_URL)

    logger.warning("Unknown provider '%s', falling back to MockProvider", name)
    return MockProvider()
