"""
Semantic ranking by cosine similarity to a query embedding
"""

import logging
from typing import List, Optional

from domain.rag.embedding.adapter import EmbeddingAdapter
from domain.rag.retrieval.similarity import cosine_similarity
from domain.rag.retrieval.types import Document, ScoredDocument


class SemanticRanker:
    """Ranks documents by cosine similarity, embedding missing ones on demand"""

    def __init__(self, embedding_adapter: EmbeddingAdapter, logger: Optional[logging.Logger] = None):
        self.embedding_adapter = embedding_adapter
        self.logger = logger or logging.getLogger(__name__)

    async def ensure_embeddings(self, documents: List[Document]) -> List[Document]:
        """Return documents with embeddings filled in (copies, inputs untouched)."""
        missing = [doc for doc in documents if not doc.embedding]
        if not missing:
            return list(documents)

        self.logger.debug(f"Embedding {len(missing)} documents on demand")
        results = await self.embedding_adapter.embed_many([doc.text for doc in missing], "document")
        filled = {doc.id: result.embedding for doc, result in zip(missing, results)}

        return [
            doc.model_copy(update={"embedding": filled[doc.id]}) if doc.id in filled else doc
            for doc in documents
        ]

    async def rank(self, query_embedding: List[float], documents: List[Document]) -> List[ScoredDocument]:
        """
        Rank documents by cosine similarity to the query, best first.

        Returns:
            ScoredDocument list whose documents all carry embeddings;
            scores are in [-1, 1], ties keep input order
        """
        embedded = await self.ensure_embeddings(documents)
        ranked = [
            ScoredDocument(document=doc, score=cosine_similarity(query_embedding, doc.embedding))
            for doc in embedded
        ]
        ranked.sort(key=lambda x: x.score, reverse=True)
        return ranked
