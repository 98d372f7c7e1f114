"""
Abstract base class for embedding providers
"""

from abc import ABC, abstractmethod
from typing import List

from domain.rag.embedding.types import TaskType


class BaseEmbeddingProvider(ABC):
    """Abstract base class for remote embedding providers"""

    @abstractmethod
    async def embed(self, text: str, task_type: TaskType = "document") -> List[float]:
        """
        Embed a single text.

        Args:
            text: Text to embed
            task_type: "document" for stored content, "query" for search text

        Returns:
            Embedding vector

        Raises:
            EmbeddingError: If the provider call fails
        """
        pass

    async def close(self) -> None:
        """Release network resources (no-op by default)"""
        pass
