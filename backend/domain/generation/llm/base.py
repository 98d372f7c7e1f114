"""
Abstract base class for LLM clients
"""

from abc import ABC, abstractmethod
from typing import Optional


class BaseLLMClient(ABC):
    """Abstract base class for all LLM clients"""

    def __init__(self, model: str, max_tokens: int, temperature: float = 0.8):
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    @abstractmethod
    async def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """
        Run a single-turn completion.

        Args:
            prompt: User message
            system_prompt: Optional system message

        Returns:
            Generated text (may be empty)

        Raises:
            LLMError: If the request fails
        """
        pass

    async def close(self) -> None:
        """Release client resources (no-op by default)"""
        pass
