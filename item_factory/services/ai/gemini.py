"""Google Gemini provider for item batches."""

from typing import Any, Optional

import google.generativeai as genai

from item_factory.core.logging import get_logger
from item_factory.services.ai.base import AIProvider

logger = get_logger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
JSON_MIME_TYPE = "application/json"


class GeminiProvider(AIProvider):
    """Gemini text model, asked for JSON output by default.

    A batch prompt always expects a bare JSON array back, so
    ``response_mime_type`` is set to JSON unless ``json_output=False``.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        temperature: float = 0.7,
        json_output: bool = True,
    ) -> None:
        self._api_key = api_key
        self._model_name = model
        self._temperature = temperature
        self._json_output = json_output
        self._model = None

        if self._api_key:
            genai.configure(api_key=self._api_key)
            self._model = genai.GenerativeModel(self._model_name)
            logger.info("GeminiProvider ready: %s", self._model_name)

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def model_name(self) -> str:
        return self._model_name

    def is_available(self) -> bool:
        return bool(self._api_key) and self._model is not None

    def _config(self, max_tokens: int, context: dict[str, Any]) -> Any:
        options: dict[str, Any] = {
            "max_output_tokens": max_tokens,
            "temperature": context.get("temperature", self._temperature),
        }
        if self._json_output:
            options["response_mime_type"] = JSON_MIME_TYPE
        return genai.types.GenerationConfig(**options)

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 4096,
        context: Optional[dict[str, Any]] = None,
    ) -> str:
        """Raw response text. Raises RuntimeError on any API failure or
        an empty (e.g. safety-blocked) response."""
        if not self.is_available():
            raise RuntimeError("GeminiProvider is not available. Check API key.")

        model = self._model
        if system_prompt:
            model = genai.GenerativeModel(
                self._model_name,
                system_instruction=system_prompt,
            )

        try:
            response = model.generate_content(
                prompt,
                generation_config=self._config(max_tokens, context or {}),
            )
            text: str = response.text.strip()
        except Exception as e:
            logger.error("Gemini API error: %s", e)
            raise RuntimeError(f"Gemini API error: {e}") from e

        if not text:
            raise RuntimeError("Gemini returned an empty response")
        logger.debug("Gemini returned %d chars", len(text))
        return text
