"""Abstract base class for AI providers."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class AIProvider(ABC):
    """Abstract base class for AI providers.

    The generation pipeline only needs prompt in, raw text out. Structure
    is imposed afterwards by the item parser, never by the transport.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name."""
        ...

    @property
    def model_name(self) -> str:
        """Model identifier recorded in prompts and results."""
        return self.name

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the provider is available and configured."""
        ...

    @abstractmethod
    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 4096,
        context: Optional[dict[str, Any]] = None,
    ) -> str:
        """Generate text based on the prompt.

        Args:
            prompt: The user prompt to send to the AI model.
            system_prompt: Optional system prompt for role/instruction.
            max_tokens: Maximum tokens for the response.
            context: Optional provider-specific options.

        Returns:
            Generated text response.

        Raises:
            RuntimeError: If the provider is unavailable or the call fails.
        """
        ...
