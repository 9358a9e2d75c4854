"""LLM 서비스 어댑터 테스트 (실제 API 호출 없음)."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from giftidea.services import llm_service

from giftidea.services.llm_service import (
    GeminiService,
    LLMServiceError,
    OpenAIService,
    create_llm_service,
)


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class TestCreateLLMService:
    """create_llm_service() 테스트."""

    def test_openai(self):
        service = create_llm_service("openai", "gpt-test")
        assert isinstance(service, OpenAIService)
        assert service.model == "gpt-test"

    def test_gemini(self):
        service = create_llm_service("Gemini")
        assert isinstance(service, GeminiService)

    def test_unknown_provider(self):
        with pytest.raises(LLMServiceError):
            create_llm_service("unknown")

    def test_each_call_creates_new_instance(self):
        """공유 싱글턴이 없다."""
        assert create_llm_service("openai") is not create_llm_service("openai")


class TestOpenAIService:
    """OpenAIService 테스트."""

    def test_call_returns_content(self):
        client = MagicMock()
        client.chat.completions.create.return_value = _completion("1. [지갑]")
        service = OpenAIService(model="gpt-test", client=client)

        assert service.call("프롬프트") == "1. [지갑]"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["messages"] == [{"role": "user", "content": "프롬프트"}]

    def test_none_content_becomes_empty(self):
        client = MagicMock()
        client.chat.completions.create.return_value = _completion(None)

        assert OpenAIService(client=client).call("p") == ""

    def test_empty_choices_raise(self):
        """choices 가 비어 있으면 LLMServiceError."""
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(choices=[])

        with pytest.raises(LLMServiceError):
            OpenAIService(client=client).call("p")

    def test_client_error_is_wrapped(self):
        client = MagicMock()
        client.chat.completions.create.side_effect = RuntimeError("timeout")

        with pytest.raises(LLMServiceError) as exc_info:
            OpenAIService(client=client).call("p")

        assert "timeout" in str(exc_info.value)

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)

        with pytest.raises(LLMServiceError):
            OpenAIService().call("p")


class TestGeminiService:
    """GeminiService 테스트."""

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

        with pytest.raises(LLMServiceError):
            GeminiService().call("p")

    def test_missing_api_key_names_both_variables(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

        with pytest.raises(LLMServiceError) as exc_info:
            GeminiService().call("p")

        assert "GEMINI_API_KEY or GOOGLE_API_KEY" in str(exc_info.value)

    def test_google_api_key_is_accepted(self, monkeypatch):
        """GEMINI_API_KEY 가 없으면 GOOGLE_API_KEY 사용."""
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
        configure = MagicMock()
        model_cls = MagicMock()
        model_cls.return_value.generate_content.return_value = SimpleNamespace(text="1. [지갑]")
        monkeypatch.setattr(llm_service.genai, "configure", configure)
        monkeypatch.setattr(llm_service.genai, "GenerativeModel", model_cls)

        service = GeminiService(model="gemini-test")
        assert service.call("p") == "1. [지갑]"
        assert service.call("p") == "1. [지갑]"

        configure.assert_called_once_with(api_key="google-key")
        model_cls.assert_called_once_with("gemini-test")

    def test_model_error_is_wrapped(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "gemini-key")
        model_cls = MagicMock()
        model_cls.return_value.generate_content.side_effect = RuntimeError("quota")
        monkeypatch.setattr(llm_service.genai, "configure", MagicMock())
        monkeypatch.setattr(llm_service.genai, "GenerativeModel", model_cls)

        with pytest.raises(LLMServiceError) as exc_info:
            GeminiService().call("p")

        assert "quota" in str(exc_info.value)
