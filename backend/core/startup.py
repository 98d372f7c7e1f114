"""
Pipeline startup and initialization logic
"""

import logging
from typing import Optional
from pydantic import BaseModel, ConfigDict

from core.config import settings
from domain.brand.cache import ThemeAnalysisCache
from domain.evaluation.brand_validator import BrandConsistencyValidator
from domain.evaluation.diversity import DiversityAnalyzer
from domain.evaluation.ranking import VariantRanker
from domain.generation.generator import BaseContentGenerator, LLMContentGenerator
from domain.generation.llm.factory import create_llm_client
from domain.rag.embedding.adapter import EmbeddingAdapter
from domain.rag.embedding.base import BaseEmbeddingProvider
from domain.rag.embedding.client import JinaEmbeddingClient
from storage.base import BaseContentStore, BaseMetadataStore
from storage.memory_store import InMemoryContentStore, InMemoryMetadataStore
from services.embedding_service import EmbeddingService
from services.retrieval_service import RetrievalService
from services.validation_service import ValidationService
from services.ranking_service import RankingService
from services.generation_service import GenerationPipeline

logger = logging.getLogger(__name__)


class PipelineComponents(BaseModel):
    """Wired collaborators and services for one process"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    content_store: BaseContentStore
    metadata_store: BaseMetadataStore
    embedding_adapter: EmbeddingAdapter
    embedding_service: EmbeddingService
    retrieval_service: RetrievalService
    validation_service: ValidationService
    ranking_service: RankingService
    pipeline: GenerationPipeline


def create_embedding_provider() -> Optional[BaseEmbeddingProvider]:
    """Jina client when a key is configured, otherwise None (deterministic embeddings only)"""
    if not settings.jina_api_key:
        logger.info("JINA_API_KEY not set; embeddings use the deterministic fallback")
        return None
    return JinaEmbeddingClient()


def initialize_pipeline(
    content_store: Optional[BaseContentStore] = None,
    metadata_store: Optional[BaseMetadataStore] = None,
    generator: Optional[BaseContentGenerator] = None,
    embedding_provider: Optional[BaseEmbeddingProvider] = None,
) -> PipelineComponents:
    """
    Wire stores, embeddings, scoring components and services.

    Args:
        content_store: Document store (default: in-memory)
        metadata_store: Theme / project store (default: in-memory)
        generator: Content generator (default: LLM generator from settings)
        embedding_provider: Embedding provider (default: from settings)

    Raises:
        LLMError: If no generator is given and the LLM client cannot be created
    """
    content_store = content_store or InMemoryContentStore()
    metadata_store = metadata_store or InMemoryMetadataStore()
    if embedding_provider is None:
        embedding_provider = create_embedding_provider()
    if generator is None:
        generator = LLMContentGenerator(create_llm_client())

    embedding_adapter = EmbeddingAdapter(provider=embedding_provider)
    embedding_service = EmbeddingService(embedding_adapter, content_store)
    retrieval_service = RetrievalService(embedding_service, content_store)
    validator = BrandConsistencyValidator(embedding_adapter)

    pipeline = GenerationPipeline(
        retrieval_service=retrieval_service,
        generator=generator,
        diversity_analyzer=DiversityAnalyzer(embedding_adapter),
        ranker=VariantRanker(),
        validator=validator,
        theme_cache=ThemeAnalysisCache(),
    )

    logger.info(
        f"Pipeline initialized (embedding provider: {'jina' if embedding_provider else 'fallback'})"
    )
    return PipelineComponents(
        content_store=content_store,
        metadata_store=metadata_store,
        embedding_adapter=embedding_adapter,
        embedding_service=embedding_service,
        retrieval_service=retrieval_service,
        validation_service=ValidationService(validator, content_store, metadata_store),
        ranking_service=RankingService(validator),
        pipeline=pipeline,
    )


async def cleanup_pipeline(components: PipelineComponents):
    """Close provider connections (embedding HTTP client, LLM client)."""
    try:
        for service in (components.validation_service, components.ranking_service, components.pipeline):
            await service.close()
        logger.info("Pipeline cleaned up")
    except Exception as e:
        logger.error(f"Error during pipeline cleanup: {e}", exc_info=True)
