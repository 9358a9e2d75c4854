"""LLM Service - Abstraction layer for AI model calls.

This module provides a unified interface for calling different LLM providers
(OpenAI, Gemini) with consistent error handling.

Interface Contract:
- call(prompt) -> str (raw reply text)
- All methods raise LLMServiceError on failure
- Callers should not depend on specific LLM provider details

Services receive an LLM instance explicitly; there is no shared default.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod

import google.generativeai as genai
from openai import OpenAI

from config import GEMINI_MODEL, LLM_PROVIDER, OPENAI_MODEL

logger = logging.getLogger(__name__)


class LLMServiceError(Exception):
    """Raised when LLM call fails."""
    pass


def _api_key(*names: str) -> str:
    """Return the first non-empty API key among the given environment variables."""
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    raise LLMServiceError(f"{' or '.join(names)} environment variable not set")


class BaseLLMService(ABC):
    """Abstract base class for LLM services."""

    @abstractmethod
    def call(self, prompt: str) -> str:
        """Call the LLM with a prompt.

        Args:
            prompt: The prompt to send to the LLM

        Returns:
            str: The LLM response text

        Raises:
            LLMServiceError: If the call fails
        """
        pass


class OpenAIService(BaseLLMService):
    """OpenAI LLM service implementation."""

    def __init__(self, model: str = OPENAI_MODEL, client: OpenAI | None = None):
        self.model = model
        self._client = client

    def _get_client(self) -> OpenAI:
        """Get or create OpenAI client (lazy initialization)."""
        if self._client is None:
            self._client = OpenAI(api_key=_api_key("OPENAI_API_KEY"))
        return self._client

    def call(self, prompt: str) -> str:
        """Call OpenAI model."""
        client = self._get_client()
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            raise LLMServiceError(f"OpenAI call failed: {e}") from e

        if not response.choices:
            raise LLMServiceError("OpenAI response has no choices")
        content = response.choices[0].message.content or ""
        logger.debug("[llm] provider=openai model=%s reply=%s", self.model, content)
        return content


class GeminiService(BaseLLMService):
    """Google Gemini LLM service implementation."""

    API_KEY_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")

    def __init__(self, model: str = GEMINI_MODEL):
        self.model = model
        self._model = None

    def _get_model(self) -> genai.GenerativeModel:
        """Configure the API key and build the model on first use."""
        if self._model is None:
            genai.configure(api_key=_api_key(*self.API_KEY_VARS))
            self._model = genai.GenerativeModel(self.model)
        return self._model

    def call(self, prompt: str) -> str:
        """Call Gemini model."""
        model = self._get_model()
        try:
            content = model.generate_content(prompt).text
        except Exception as e:
            raise LLMServiceError(f"Gemini call failed: {e}") from e
        logger.debug("[llm] provider=gemini model=%s reply=%s", self.model, content)
        return content


def create_llm_service(provider: str | None = None, model: str | None = None) -> BaseLLMService:
    """Create an LLM service for the given provider.

    Args:
        provider: "openai" or "gemini" (defaults to LLM_PROVIDER)
        model: Model name (defaults to the provider's configured model)

    Raises:
        LLMServiceError: If the provider is unknown
    """
    provider = (provider or LLM_PROVIDER).lower()
    if provider == "openai":
        return OpenAIService(model=model or OPENAI_MODEL)
    if provider == "gemini":
        return GeminiService(model=model or GEMINI_MODEL)
    raise LLMServiceError(f"Unknown LLM provider: {provider}")
