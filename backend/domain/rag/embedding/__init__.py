"""
Embedding generation: provider client, deterministic fallback, adapter
"""

from domain.rag.embedding.base import BaseEmbeddingProvider
from domain.rag.embedding.client import JinaEmbeddingClient
from domain.rag.embedding.fallback import DeterministicEmbedder
from domain.rag.embedding.adapter import EmbeddingAdapter
from domain.rag.embedding.batch_processor import BatchProcessor, TaskOutcome
from domain.rag.embedding.types import EmbeddingResult, TaskType

__all__ = [
    "BaseEmbeddingProvider",
    "JinaEmbeddingClient",
    "DeterministicEmbedder",
    "EmbeddingAdapter",
    "BatchProcessor",
    "TaskOutcome",
    "EmbeddingResult",
    "TaskType",
]
