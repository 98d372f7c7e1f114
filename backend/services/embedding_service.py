"""
Embedding service - store-aware embeddings
INTERNAL SERVICE: Called by RetrievalService (query + document embeddings)
"""

import logging
from typing import List, Optional
from domain.rag.embedding.adapter import EmbeddingAdapter
from domain.rag.embedding.batch_processor import BatchProcessor
from domain.rag.embedding.types import EmbeddingResult, TaskType
from domain.rag.retrieval.types import Document
from storage.base import BaseContentStore
from services.base import BaseService
from core.config import settings


class EmbeddingService(BaseService):
    """
    Resolves embeddings for queries and stored documents.

    Handles:
    - Query embeddings: always computed fresh through the adapter
    - Document embeddings: reused from the document or the store's cache when
      dimension-correct, otherwise computed and written back to the store
    """

    def __init__(
        self,
        embedding_adapter: EmbeddingAdapter,
        content_store: Optional[BaseContentStore] = None,
        persist_embeddings: bool = None,
        max_concurrent: int = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.embedding_adapter = embedding_adapter
        self.content_store = content_store
        self.persist_embeddings = (
            settings.retrieval_persist_embeddings if persist_embeddings is None else persist_embeddings
        )
        self.logger = logger or logging.getLogger(__name__)
        self.batch_processor = BatchProcessor(
            max_concurrent=max_concurrent or settings.embedding_max_concurrent,
            logger=self.logger,
        )

    @property
    def dimensions(self) -> int:
        return self.embedding_adapter.dimensions

    @property
    def provider_available(self) -> bool:
        return self.embedding_adapter.provider_available

    def _usable(self, embedding: Optional[List[float]]) -> bool:
        return bool(embedding) and len(embedding) == self.dimensions

    async def embed_query(self, text: str) -> List[float]:
        """Embed search text"""
        return await self.embedding_adapter.embed(text, "query")

    async def embed_documents(self, texts: List[str], task_type: TaskType = "document") -> List[EmbeddingResult]:
        """Embed several texts concurrently, in input order"""
        return await self.embedding_adapter.embed_many(texts, task_type)

    async def _cached_embedding(self, content_id: str) -> Optional[List[float]]:
        if self.content_store is None:
            return None
        try:
            return await self.content_store.get_embedding(content_id)
        except Exception as e:
            self.logger.warning(f"Embedding cache read failed for {content_id}: {e}")
            return None

    async def get_document_embedding(self, document: Document) -> List[float]:
        """
        Embedding for a stored document.

        Only provider-produced embeddings are written back; fallback vectors
        are recomputed on demand instead of being cached. A failed write is
        logged and the embedding still returned.
        """
        if self._usable(document.embedding):
            return document.embedding

        cached = await self._cached_embedding(document.id)
        if self._usable(cached):
            return cached

        result = await self.embedding_adapter.embed_result(document.text, "document")

        if self.persist_embeddings and self.content_store is not None and not result.degraded:
            try:
                await self.content_store.save_embedding(document.id, result.embedding)
                self.logger.debug(f"Stored embedding for {document.id}")
            except Exception as e:
                self.logger.warning(f"Failed to store embedding for {document.id}: {e}")

        return result.embedding

    async def resolve_document_embeddings(self, documents: List[Document]) -> List[Document]:
        """
        Copies of documents with embeddings filled in.

        Per-document failures fall back to the deterministic embedding so no
        document is dropped.
        """
        outcomes = await self.batch_processor.process_batch(documents, self.get_document_embedding)

        resolved = []
        for document, outcome in zip(documents, outcomes):
            if outcome.ok:
                embedding = outcome.value
            else:
                self.logger.warning(f"Embedding failed for {document.id}, using fallback: {outcome.error}")
                embedding = self.embedding_adapter.fallback.embed(document.text)
            resolved.append(document.model_copy(update={"embedding": embedding}))
        return resolved

    async def close(self):
        """Close provider connections"""
        await self.embedding_adapter.close()
