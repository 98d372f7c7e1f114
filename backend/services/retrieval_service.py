"""
Retrieval service - hybrid retrieval: BM25 + semantic → RRF → MMR
"""

import logging
from typing import Dict, List, Optional
from domain.brand.types import Theme
from domain.rag.retrieval.bm25 import BM25Scorer
from domain.rag.retrieval.fusion import reciprocal_rank_fusion
from domain.rag.retrieval.mmr import mmr_select
from domain.rag.retrieval.semantic import SemanticRanker
from domain.rag.retrieval.similarity import cosine_similarity
from domain.rag.retrieval.tokenizer import tokenize
from domain.rag.retrieval.types import (
    Document,
    RankedCandidate,
    RetrievalConfig,
    RetrievalContext,
    RetrievalMethod,
)
from storage.base import BaseContentStore
from services.base import BaseService
from services.embedding_service import EmbeddingService
from core.exceptions import RetrievalError


def build_theme_text(theme: Theme) -> str:
    """'{name}: {tags} inspired by {inspirations}', skipping empty parts"""
    text = theme.name or ""
    tags = [t for t in theme.tags if t]
    if tags:
        text = f"{text}: {', '.join(tags)}" if text else ", ".join(tags)
    inspirations = [i for i in theme.inspirations if i]
    if inspirations:
        text = f"{text} inspired by {', '.join(inspirations)}".strip()
    return text


def select_method(lexical_usable: bool, semantic_usable: bool) -> RetrievalMethod:
    """
    Method for a non-empty corpus.

    hybrid when both signals are usable, semantic when the query is too short
    for lexical scoring, bm25 when embeddings are unavailable (and as the last
    resort when neither signal is strong).
    """
    if lexical_usable and semantic_usable:
        return "hybrid"
    if semantic_usable:
        return "semantic"
    return "bm25"


class RetrievalService(BaseService):
    """
    Orchestrates retrieval of prior project content for a generation request.

    An empty corpus is a normal state (new project) and yields a theme_only
    context rather than an error.
    """

    def __init__(
        self,
        embedding_service: EmbeddingService,
        content_store: BaseContentStore,
        config: Optional[RetrievalConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.embedding_service = embedding_service
        self.content_store = content_store
        self.config = config or RetrievalConfig.from_settings()
        self.logger = logger or logging.getLogger(__name__)
        self.bm25 = BM25Scorer(self.config.bm25)
        self.semantic_ranker = SemanticRanker(embedding_service.embedding_adapter, logger=self.logger)

    async def _load_corpus(self, project_id: Optional[str]) -> List[Document]:
        if not project_id:
            return []
        try:
            documents = await self.content_store.list_project_documents(project_id)
        except Exception as e:
            self.logger.error(f"Failed to load content for project {project_id}: {e}")
            return []
        return [doc for doc in documents if doc.text and doc.text.strip()]

    def _theme_only(self, theme_text: str, theme_embedding: List[float]) -> RetrievalContext:
        return RetrievalContext(
            relevant_documents=[],
            similar_summaries=[theme_text] if theme_text else [],
            theme_embedding=theme_embedding,
            average_similarity=0.0,
            method="theme_only",
        )

    async def theme_only_context(self, theme: Theme) -> RetrievalContext:
        """Context anchored on the theme alone, used when prior content is unavailable."""
        theme_text = build_theme_text(theme)
        return self._theme_only(theme_text, await self.embedding_service.embed_query(theme_text))

    async def retrieve_context(self, project_id: Optional[str], prompt: str, theme: Theme) -> RetrievalContext:
        """
        Build the retrieval context for a prompt.

        Args:
            project_id: Project whose prior content is searched
            prompt: User prompt
            theme: Brand theme (anchor text when nothing relevant exists)

        Returns:
            RetrievalContext; method is one of hybrid, semantic, bm25, theme_only

        Raises:
            RetrievalError: If ranking fails for a non-empty corpus
        """
        theme_text = build_theme_text(theme)
        theme_embedding = await self.embedding_service.embed_query(theme_text)

        corpus = await self._load_corpus(project_id)
        if not corpus:
            self.logger.info(f"No prior content for project {project_id}; using theme only")
            return self._theme_only(theme_text, theme_embedding)

        try:
            return await self._hybrid_retrieve(prompt, corpus, theme_text, theme_embedding)
        except Exception as e:
            self.logger.error(f"Error in retrieve_context: {e}")
            raise RetrievalError(f"Hybrid retrieval failed: {e}")

    async def _hybrid_retrieve(
        self,
        prompt: str,
        corpus: List[Document],
        theme_text: str,
        theme_embedding: List[float],
    ) -> RetrievalContext:
        query_terms = set(tokenize(prompt))
        lexical_usable = len(query_terms) >= max(1, self.config.min_query_terms)
        semantic_usable = self.embedding_service.provider_available
        method = select_method(lexical_usable, semantic_usable)
        pool_size = self.config.candidate_pool_size

        candidates: Dict[str, RankedCandidate] = {
            doc.id: RankedCandidate(document=doc) for doc in corpus
        }
        rankings: List[List[str]] = []

        if method in ("hybrid", "bm25"):
            lexical = [s for s in self.bm25.rank(prompt, corpus) if s.score > 0][:pool_size]
            for rank, scored in enumerate(lexical, start=1):
                candidates[scored.document.id].lexical_rank = rank
            rankings.append([s.document.id for s in lexical])

        query_embedding = await self.embedding_service.embed_query(prompt)

        if method in ("hybrid", "semantic"):
            embedded_corpus = await self.embedding_service.resolve_document_embeddings(corpus)
            semantic = (await self.semantic_ranker.rank(query_embedding, embedded_corpus))[:pool_size]
            for rank, scored in enumerate(semantic, start=1):
                candidate = candidates[scored.document.id]
                candidate.document = scored.document
                candidate.semantic_rank = rank
                candidate.semantic_similarity = scored.score
            rankings.append([s.document.id for s in semantic])

        fused = reciprocal_rank_fusion(
            rankings, k=self.config.rrf_k, candidate_order=[doc.id for doc in corpus]
        )
        pool = []
        for doc_id, score in fused[:pool_size]:
            if score <= 0:
                break
            candidates[doc_id].fused_score = score
            pool.append(candidates[doc_id])

        if not pool:
            self.logger.info("No document matched the prompt; using theme only")
            return self._theme_only(theme_text, theme_embedding)

        # Diversity needs embeddings for the pool, whatever the method
        pool_documents = await self.embedding_service.resolve_document_embeddings(
            [c.document for c in pool]
        )
        selected_idx = mmr_select(
            relevance=[c.fused_score for c in pool],
            embeddings=[doc.embedding for doc in pool_documents],
            top_k=self.config.top_k,
            lambda_=self.config.mmr_lambda,
        )
        selected = [pool_documents[i] for i in selected_idx]

        similarities = [
            max(0.0, cosine_similarity(query_embedding, doc.embedding)) for doc in selected
        ]
        average_similarity = sum(similarities) / len(similarities) if similarities else 0.0

        summaries = [doc.metadata.get("prompt") or doc.text for doc in selected]
        if theme_text:
            summaries.append(theme_text)

        self.logger.info(
            f"Retrieval ({method}): {len(corpus)} documents, pool {len(pool)}, "
            f"selected {len(selected)}, avg similarity {average_similarity:.3f}"
        )

        return RetrievalContext(
            relevant_documents=selected,
            similar_summaries=summaries,
            theme_embedding=theme_embedding,
            average_similarity=min(1.0, average_similarity),
            method=method,
        )
