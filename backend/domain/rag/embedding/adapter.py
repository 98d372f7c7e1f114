"""
Embedding adapter: provider call bounded by a timeout, deterministic fallback on any failure
"""

import logging
import asyncio
from typing import List, Optional

from core.config import settings
from domain.rag.embedding.base import BaseEmbeddingProvider
from domain.rag.embedding.batch_processor import BatchProcessor
from domain.rag.embedding.fallback import DeterministicEmbedder
from domain.rag.embedding.types import EmbeddingResult, TaskType


class EmbeddingAdapter:
    """
    Single entry point for embeddings.

    Callers always get a vector of `dimensions` floats. Provider errors,
    timeouts, empty responses and wrong-sized vectors are absorbed and
    replaced by the deterministic fallback, logged as degraded.
    """

    def __init__(
        self,
        provider: Optional[BaseEmbeddingProvider] = None,
        dimensions: int = None,
        timeout: float = None,
        max_concurrent: int = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.provider = provider
        self.dimensions = dimensions or settings.embedding_dimensions
        self.timeout = timeout or settings.embedding_timeout
        self.fallback = DeterministicEmbedder(self.dimensions)
        self.logger = logger or logging.getLogger(__name__)
        self.batch_processor = BatchProcessor(
            max_concurrent=max_concurrent or settings.embedding_max_concurrent,
            logger=self.logger,
        )

    @property
    def provider_available(self) -> bool:
        return self.provider is not None

    def _fallback_result(self, text: str, task_type: TaskType, reason: Optional[str]) -> EmbeddingResult:
        return EmbeddingResult(
            text=text,
            embedding=self.fallback.embed(text),
            task_type=task_type,
            source="fallback",
            model_embed="deterministic-hash",
            error=reason,
        )

    async def embed_result(self, text: str, task_type: TaskType = "document") -> EmbeddingResult:
        """
        Embed text and report whether the provider or the fallback produced it.

        Raises:
            ValueError: If task_type is not "document" or "query"
        """
        if task_type not in ("document", "query"):
            raise ValueError(f"Invalid task_type: {task_type}. Must be one of: 'document', 'query'")

        if self.provider is None:
            self.logger.debug("No embedding provider configured, using deterministic fallback")
            return self._fallback_result(text, task_type, reason=None)

        try:
            vector = await asyncio.wait_for(
                self.provider.embed(text, task_type), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            reason = f"timed out after {self.timeout}s"
        except Exception as e:
            reason = str(e) or type(e).__name__
        else:
            if not vector:
                reason = "empty response"
            elif len(vector) != self.dimensions:
                reason = f"dimension mismatch ({len(vector)} != {self.dimensions})"
            else:
                return EmbeddingResult(
                    text=text,
                    embedding=[float(x) for x in vector],
                    task_type=task_type,
                    source="provider",
                )

        self.logger.warning(f"Embedding provider degraded ({reason}); using deterministic fallback")
        return self._fallback_result(text, task_type, reason=reason)

    async def embed(self, text: str, task_type: TaskType = "document") -> List[float]:
        """Embed text; never raises for provider problems."""
        result = await self.embed_result(text, task_type)
        return result.embedding

    async def embed_many(self, texts: List[str], task_type: TaskType = "document") -> List[EmbeddingResult]:
        """Embed texts concurrently; results are in input order."""
        outcomes = await self.batch_processor.process_batch(
            texts, lambda text: self.embed_result(text, task_type)
        )
        results = []
        for outcome, text in zip(outcomes, texts):
            if outcome.ok:
                results.append(outcome.value)
            else:
                results.append(self._fallback_result(text, task_type, reason=str(outcome.error)))
        return results

    async def close(self):
        """Close the provider's network resources"""
        if self.provider is not None:
            await self.provider.close()
