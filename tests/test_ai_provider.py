"""Tests for AI provider module."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from item_factory.core.generation import parse_items
from item_factory.core.prompt import GenerationParams, PromptTemplateLoader, compile_prompt
from item_factory.services.ai import (
    AIProvider,
    GeminiProvider,
    MockProvider,
    OllamaProvider,
    get_ai_provider,
)


class TestMockProvider:
    """Tests for MockProvider class."""

    def test_mock_provider_name(self):
        """Test that MockProvider name is 'mock'."""
        provider = MockProvider()
        assert provider.name == "mock"
        assert provider.model_name == "mock"

    def test_mock_provider_is_available(self):
        """Test that MockProvider is always available."""
        assert MockProvider().is_available() is True

    def test_mock_provider_plain_text(self):
        """Prompts without JSON get static text."""
        result = MockProvider().generate("test prompt")
        assert "[Mock]" in result

    def test_mock_provider_injected_response(self):
        """A fixed response is returned verbatim and the prompt recorded."""
        provider = MockProvider(response="[]")
        assert provider.generate("anything JSON") == "[]"
        assert provider.calls == ["anything JSON"]

    def test_mock_items_satisfy_compiled_prompt(self, food_profile, player_profile):
        """Mock output for a compiled prompt parses cleanly against the profile."""
        prompt = compile_prompt(food_profile, player_profile, GenerationParams(count=3))
        raw = MockProvider().generate(prompt)

        items = json.loads(raw)
        assert len(items) == 3
        result = parse_items(raw, food_profile)
        assert result.rejections == []
        assert [i["id"] for i in result.items] == [
            "food_mockfood1",
            "food_mockfood2",
            "food_mockfood3",
        ]

    def test_mock_items_deterministic(self, food_profile, player_profile):
        prompt = compile_prompt(food_profile, player_profile, GenerationParams(count=2))
        assert MockProvider().generate(prompt) == MockProvider().generate(prompt)

    def test_mock_honours_count_with_template_header(self, food_profile, player_profile):
        """The shipped Food template replaces the generic header."""
        loader = PromptTemplateLoader(Path(__file__).resolve().parents[1] / "prompts")
        prompt = compile_prompt(
            food_profile,
            player_profile,
            GenerationParams(count=5),
            template_loader=loader,
        )
        assert not prompt.startswith("Generate ")

        result = parse_items(MockProvider().generate(prompt), food_profile)
        assert len(result.items) == 5
        assert result.items[0]["id"] == "food_mockfood1"


class TestGeminiProvider:
    """Tests for GeminiProvider class."""

    @patch("item_factory.services.ai.gemini.genai")
    def test_gemini_provider_name(self, mock_genai: MagicMock):
        """Test that GeminiProvider name is 'gemini'."""
        provider = GeminiProvider(api_key="test_key", model="gemini-x")
        assert provider.name == "gemini"
        assert provider.model_name == "gemini-x"

    @patch("item_factory.services.ai.gemini.genai")
    def test_gemini_provider_not_available_without_key(self, mock_genai: MagicMock):
        """Test that GeminiProvider is not available without API key."""
        provider = GeminiProvider(api_key="")
        assert provider.is_available() is False
        with pytest.raises(RuntimeError):
            provider.generate("prompt")

    @patch("item_factory.services.ai.gemini.genai")
    def test_gemini_generate_returns_text(self, mock_genai: MagicMock):
        """Response text is stripped and returned."""
        mock_genai.GenerativeModel.return_value.generate_content.return_value.text = (
            "  [] \n"
        )
        provider = GeminiProvider(api_key="test_key")
        assert provider.generate("prompt") == "[]"

    @patch("item_factory.services.ai.gemini.genai")
    def test_gemini_api_error_wrapped(self, mock_genai: MagicMock):
        """API exceptions surface as RuntimeError."""
        mock_genai.GenerativeModel.return_value.generate_content.side_effect = ValueError(
            "quota"
        )
        provider = GeminiProvider(api_key="test_key")
        with pytest.raises(RuntimeError, match="quota"):
            provider.generate("prompt")

    @patch("item_factory.services.ai.gemini.genai")
    def test_gemini_requests_json_output(self, mock_genai: MagicMock):
        """Batches ask for JSON; context temperature overrides the default."""
        mock_genai.GenerativeModel.return_value.generate_content.return_value.text = "[]"
        GeminiProvider(api_key="test_key").generate(
            "prompt", max_tokens=200, context={"temperature": 0.2}
        )

        kwargs = mock_genai.types.GenerationConfig.call_args.kwargs
        assert kwargs == {
            "max_output_tokens": 200,
            "temperature": 0.2,
            "response_mime_type": "application/json",
        }

    @patch("item_factory.services.ai.gemini.genai")
    def test_gemini_plain_text_mode(self, mock_genai: MagicMock):
        mock_genai.GenerativeModel.return_value.generate_content.return_value.text = "ok"
        GeminiProvider(api_key="test_key", json_output=False).generate("prompt")

        kwargs = mock_genai.types.GenerationConfig.call_args.kwargs
        assert "response_mime_type" not in kwargs
        assert kwargs["temperature"] == 0.7

    @patch("item_factory.services.ai.gemini.genai")
    def test_gemini_empty_response_raises(self, mock_genai: MagicMock):
        mock_genai.GenerativeModel.return_value.generate_content.return_value.text = "  "
        with pytest.raises(RuntimeError, match="empty response"):
            GeminiProvider(api_key="test_key").generate("prompt")


class TestOllamaProvider:
    """Tests for OllamaProvider class."""

    @patch("item_factory.services.ai.ollama_provider.ollama")
    def test_generate_passes_options(self, mock_ollama: MagicMock):
        client = mock_ollama.Client.return_value
        client.generate.return_value = {"response": " [1] "}

        provider = OllamaProvider(model="llama3.1:8b", host="http://box:11434")
        result = provider.generate("prompt", system_prompt="sys", max_tokens=100)

        assert result == "[1]"
        mock_ollama.Client.assert_called_once_with(host="http://box:11434")
        kwargs = client.generate.call_args.kwargs
        assert kwargs["model"] == "llama3.1:8b"
        assert kwargs["system"] == "sys"
        assert kwargs["options"]["num_predict"] == 100

    @patch("item_factory.services.ai.ollama_provider.ollama")
    def test_generate_error_wrapped(self, mock_ollama: MagicMock):
        class FakeResponseError(Exception):
            status_code = 404
            error = "model not found"

        mock_ollama.ResponseError = FakeResponseError
        mock_ollama.Client.return_value.generate.side_effect = FakeResponseError()

        provider = OllamaProvider()
        with pytest.raises(RuntimeError, match="model not found"):
            provider.generate("prompt")

    @patch("item_factory.services.ai.ollama_provider.ollama")
    def test_is_available(self, mock_ollama: MagicMock):
        client = mock_ollama.Client.return_value
        client.list.return_value = {"models": [{"model": "llama3.1:8b"}]}
        assert OllamaProvider(model="llama3.1:8b").is_available() is True
        assert OllamaProvider(model="mistral").is_available() is False

        client.list.side_effect = ConnectionError("refused")
        assert OllamaProvider().is_available() is False


class TestAIProviderFactory:
    """Tests for AI provider factory."""

    @patch("item_factory.services.ai.factory.settings")
    def test_factory_returns_mock(self, mock_settings: MagicMock):
        """Test that factory returns MockProvider when configured for mock."""
        mock_settings.AI_PROVIDER = "mock"
        provider = get_ai_provider()

        assert isinstance(provider, AIProvider)
        assert isinstance(provider, MockProvider)

    @patch("item_factory.services.ai.factory.settings")
    @patch("item_factory.services.ai.gemini.genai")
    def test_factory_returns_gemini_with_config(
        self, mock_genai: MagicMock, mock_settings: MagicMock
    ):
        """Test that factory returns GeminiProvider when configured."""
        mock_settings.AI_PROVIDER = "gemini"
        mock_settings.AI_API_KEY = "test_key"
        mock_settings.AI_MODEL = "gemini-2.0-flash"

        provider = get_ai_provider()

        assert isinstance(provider, GeminiProvider)

    @patch("item_factory.services.ai.factory.settings")
    def test_factory_fallback_without_key(self, mock_settings: MagicMock):
        """Test that factory falls back to mock without API key."""
        mock_settings.AI_PROVIDER = "gemini"
        mock_settings.AI_API_KEY = None

        assert isinstance(get_ai_provider(), MockProvider)

    @patch("item_factory.services.ai.factory.settings")
    @patch("item_factory.services.ai.ollama_provider.ollama")
    def test_factory_returns_ollama(self, mock_ollama: MagicMock, mock_settings: MagicMock):
        mock_settings.AI_MODEL = None
        mock_settings.AI_BASE_URL = "http://localhost:11434"

        provider = get_ai_provider("ollama")

        assert isinstance(provider, OllamaProvider)
        assert provider.model_name == "llama3.1:8b"

    def test_factory_unknown_provider(self):
        assert isinstance(get_ai_provider("gpt-42"), MockProvider)
