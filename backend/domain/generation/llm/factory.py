"""
Factory for creating LLM clients
"""

import os
from typing import Optional

from domain.generation.llm.base import BaseLLMClient
from domain.generation.llm.groq_client import GroqClient
from core.config import settings
from core.exceptions import LLMError


def create_llm_client(provider: Optional[str] = None, api_key: Optional[str] = None) -> BaseLLMClient:
    """
    Create an LLM client based on configuration.

    Args:
        provider: LLM provider name (overrides settings)
        api_key: API key (overrides settings / environment variable)

    Returns:
        BaseLLMClient instance

    Raises:
        LLMError: If provider is not supported, no key is configured, or client creation fails
    """
    provider = (provider or settings.llm_provider).lower()

    if provider == "groq":
        api_key = api_key or settings.groq_api_key or os.getenv("GROQ_API_KEY")
        if not api_key:
            raise LLMError("Groq API key not set. Set GROQ_API_KEY environment variable or pass api_key parameter.")
        return GroqClient(
            model=settings.llm_model,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
            api_key=api_key,
        )
    raise LLMError(f"Unknown LLM provider: {provider}")
