"""
Groq LLM client implementation
"""

import logging
from typing import Any, Dict, List, Optional
from groq import AsyncGroq

from domain.generation.llm.base import BaseLLMClient
from core.exceptions import LLMError

logger = logging.getLogger(__name__)


class GroqClient(BaseLLMClient):
    """Groq LLM client implementation"""

    def __init__(
        self,
        model: str,
        max_tokens: int,
        temperature: float = 0.8,
        api_key: Optional[str] = None,
        client: Optional[AsyncGroq] = None,
    ):
        super().__init__(model, max_tokens, temperature)
        try:
            self.client = client or AsyncGroq(api_key=api_key)
        except Exception as e:
            raise LLMError(f"Failed to initialize Groq client: {e}")

    @staticmethod
    def build_messages(prompt: str, system_prompt: Optional[str] = None) -> List[Dict[str, Any]]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages

    async def complete(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """Make a chat completion request to Groq"""
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                messages=self.build_messages(prompt, system_prompt),
            )
        except Exception as e:
            logger.error(f"Error calling Groq API: {e}")
            raise LLMError(f"Groq API call failed: {e}")
        return self.extract_text_content(response)

    def extract_text_content(self, response: Any) -> str:
        """Extract text content from Groq response"""
        if not response.choices:
            return ""
        message = response.choices[0].message
        return message.content or ""

    async def close(self) -> None:
        await self.client.close()
