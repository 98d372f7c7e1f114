"""
Service layer (business logic orchestration)
"""

from services.base import BaseService
from services.embedding_service import EmbeddingService
from services.retrieval_service import RetrievalService
from services.validation_service import ValidationService
from services.ranking_service import RankingService
from services.generation_service import GenerationPipeline

__all__ = [
    "BaseService",
    "EmbeddingService",
    "RetrievalService",
    "ValidationService",
    "RankingService",
    "GenerationPipeline",
]
