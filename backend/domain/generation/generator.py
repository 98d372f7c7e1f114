"""
Generative content providers
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from core.config import settings
from core.exceptions import GenerationError
from domain.generation.llm.base import BaseLLMClient
from domain.generation.parser import parse_variants

SYSTEM_PROMPT = (
    "You are a brand copywriter. Follow the requested variant markers exactly "
    "and do not add commentary outside them."
)


class BaseContentGenerator(ABC):
    """Opaque text-in / variants-out provider"""

    @abstractmethod
    async def generate(self, prompt: str, count: int) -> List[str]:
        """
        Generate up to `count` variants for a prompt.

        Raises:
            GenerationError: If the provider fails
        """
        pass

    async def close(self) -> None:
        pass


class LLMContentGenerator(BaseContentGenerator):
    """Generates variants with one LLM completion, bounded by a timeout"""

    def __init__(
        self,
        llm_client: BaseLLMClient,
        timeout: float = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.llm_client = llm_client
        self.timeout = timeout or settings.llm_timeout
        self.logger = logger or logging.getLogger(__name__)

    async def generate(self, prompt: str, count: int) -> List[str]:
        if count <= 0:
            return []
        try:
            raw = await asyncio.wait_for(
                self.llm_client.complete(prompt, system_prompt=SYSTEM_PROMPT),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            raise GenerationError(f"Generation timed out after {self.timeout}s")
        except Exception as e:
            raise GenerationError(f"Generation failed: {e}")

        variants = parse_variants(raw, count)
        if len(variants) < count:
            self.logger.warning(f"Generator returned {len(variants)} of {count} requested variants")
        return variants

    async def close(self) -> None:
        await self.llm_client.close()
