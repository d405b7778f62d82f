"""Ollama (local model server) provider implementation."""

from typing import Any, Optional

import ollama

from item_factory.core.logging import get_logger
from item_factory.services.ai.base import AIProvider

logger = get_logger(__name__)

DEFAULT_OLLAMA_MODEL = "llama3.1:8b"


class OllamaProvider(AIProvider):
    """AI provider talking to a local Ollama server."""

    def __init__(
        self,
        model: str = DEFAULT_OLLAMA_MODEL,
        host: Optional[str] = None,
        temperature: float = 0.7,
    ) -> None:
        """Initialize the Ollama provider.

        Args:
            model: Model tag known to the server (``ollama list``).
            host: Server URL. None uses the client default / OLLAMA_HOST.
            temperature: Default sampling temperature.
        """
        self._model_name = model
        self._temperature = temperature
        self._client = ollama.Client(host=host)
        logger.info("OllamaProvider initialized with model: %s", self._model_name)

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "ollama"

    @property
    def model_name(self) -> str:
        return self._model_name

    def is_available(self) -> bool:
        """True when the server answers and has the model pulled."""
        try:
            response = self._client.list()
        except Exception as e:
            logger.warning("Ollama is not running or not accessible: %s", e)
            return False

        for m in response.get("models", []) or []:
            name = m.get("model") or m.get("name") or ""
            if name == self._model_name or name.split(":")[0] == self._model_name:
                return True
        logger.warning("Ollama model '%s' is not installed", self._model_name)
        return False

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 4096,
        context: Optional[dict[str, Any]] = None,
    ) -> str:
        """Generate text with ``ollama.generate``.

        ``context`` may carry ``temperature``.

        Raises:
            RuntimeError: If the server rejects the request or is unreachable.
        """
        options = {
            "num_predict": max_tokens,
            "temperature": (context or {}).get("temperature", self._temperature),
        }
        params: dict[str, Any] = {
            "model": self._model_name,
            "prompt": prompt,
            "options": options,
        }
        if system_prompt:
            params["system"] = system_prompt

        try:
            response = self._client.generate(**params)
        except ollama.ResponseError as e:
            logger.error("Ollama error (status %s): %s", e.status_code, e.error)
            raise RuntimeError(f"Ollama error: {e.error}") from e
        except Exception as e:
            logger.error("Ollama request failed: %s", e)
            raise RuntimeError(f"Ollama request failed: {e}") from e

        result: str = (response.get("response") or "").strip()
        return result
