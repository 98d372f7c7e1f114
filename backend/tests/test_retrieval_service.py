"""
Tests for store-aware embeddings and the hybrid retrieval orchestrator
"""

import logging

import pytest

from core.exceptions import RetrievalError, StorageError
from domain.brand.types import Theme
from domain.rag.retrieval.types import Document, RetrievalConfig
from services.embedding_service import EmbeddingService
from services.retrieval_service import RetrievalService, build_theme_text, select_method
from storage.memory_store import InMemoryContentStore
from tests.fakes import DIMENSIONS, concept_vector


class BrokenContentStore(InMemoryContentStore):
    async def list_project_documents(self, project_id):
        raise StorageError("database offline")


def make_service(adapter, store, **config):
    embedding_service = EmbeddingService(adapter, store)
    return RetrievalService(embedding_service, store, config=RetrievalConfig(**config))


# ---------------------------------------------------------------------------
# EMBEDDING SERVICE
# ---------------------------------------------------------------------------


class TestEmbeddingService:

    async def test_reuses_document_embedding(self, adapter, keyword_provider):
        service = EmbeddingService(adapter, InMemoryContentStore())
        doc = Document(id="d1", text="GPU", embedding=[0.5] * DIMENSIONS)

        assert await service.get_document_embedding(doc) == [0.5] * DIMENSIONS
        assert keyword_provider.calls == []

    async def test_reuses_store_cache(self, adapter, keyword_provider, content_store):
        await content_store.save_embedding("doc-gpu", [0.25] * DIMENSIONS)
        service = EmbeddingService(adapter, content_store)
        doc = Document(id="doc-gpu", text="Scale GPU training jobs")

        assert await service.get_document_embedding(doc) == [0.25] * DIMENSIONS
        assert keyword_provider.calls == []

    async def test_wrong_size_embedding_is_recomputed(self, adapter, content_store):
        service = EmbeddingService(adapter, content_store)
        doc = Document(id="doc-gpu", text="GPU cluster", embedding=[1.0, 2.0])

        assert await service.get_document_embedding(doc) == concept_vector("GPU cluster")

    async def test_provider_embedding_written_back(self, adapter, content_store):
        service = EmbeddingService(adapter, content_store)
        doc = Document(id="doc-coffee", text="espresso roast")

        embedding = await service.get_document_embedding(doc)

        assert await content_store.get_embedding("doc-coffee") == embedding

    async def test_fallback_embedding_not_written_back(self, fallback_adapter, content_store):
        service = EmbeddingService(fallback_adapter, content_store)
        await service.get_document_embedding(Document(id="doc-coffee", text="espresso roast"))

        assert await content_store.get_embedding("doc-coffee") is None

    async def test_persistence_can_be_disabled(self, adapter, content_store):
        service = EmbeddingService(adapter, content_store, persist_embeddings=False)
        await service.get_document_embedding(Document(id="doc-coffee", text="espresso roast"))

        assert await content_store.get_embedding("doc-coffee") is None

    async def test_failed_write_still_returns_embedding(self, adapter, caplog):
        service = EmbeddingService(adapter, InMemoryContentStore())
        with caplog.at_level(logging.WARNING):
            embedding = await service.get_document_embedding(Document(id="unknown", text="GPU"))

        assert embedding == concept_vector("GPU")
        assert "Failed to store embedding" in caplog.text

    async def test_resolve_returns_copies(self, adapter):
        service = EmbeddingService(adapter)
        documents = [Document(id="a", text="coral"), Document(id="b", text="GPU")]

        resolved = await service.resolve_document_embeddings(documents)

        assert [d.embedding for d in resolved] == [concept_vector("coral"), concept_vector("GPU")]
        assert documents[0].embedding is None

    async def test_embed_documents(self, adapter):
        results = await EmbeddingService(adapter).embed_documents(["coral", "GPU"])
        assert [r.embedding for r in results] == [concept_vector("coral"), concept_vector("GPU")]


# ---------------------------------------------------------------------------
# HELPERS
# ---------------------------------------------------------------------------


class TestHelpers:

    def test_theme_text(self, ocean_theme):
        assert build_theme_text(ocean_theme) == (
            "Ocean Loom: seaweed, coral, weaving inspired by tide pools, coral reefs"
        )

    def test_theme_text_skips_empty_parts(self):
        assert build_theme_text(Theme(name="Solo")) == "Solo"
        assert build_theme_text(Theme()) == ""

    @pytest.mark.parametrize("lexical,semantic,expected", [
        (True, True, "hybrid"),
        (False, True, "semantic"),
        (True, False, "bm25"),
        (False, False, "bm25"),
    ])
    def test_select_method(self, lexical, semantic, expected):
        assert select_method(lexical, semantic) == expected


# ---------------------------------------------------------------------------
# HYBRID RETRIEVAL
# ---------------------------------------------------------------------------


class TestRetrievalService:

    async def test_hybrid_retrieval(self, adapter, content_store, ml_theme):
        service = make_service(adapter, content_store)
        context = await service.retrieve_context("project-ml", "GPU training on Kubernetes clusters", ml_theme)

        assert context.method == "hybrid"
        assert [d.id for d in context.relevant_documents] == ["doc-gpu", "doc-mlops", "doc-coffee"]
        assert context.average_similarity == pytest.approx(2 / 3)
        assert context.similar_summaries[1] == "MLOps pipeline announcement"
        assert context.similar_summaries[-1] == build_theme_text(ml_theme)
        assert len(context.theme_embedding) == DIMENSIONS

    async def test_average_similarity_measured_against_query(self, adapter, content_store, ocean_theme):
        service = make_service(adapter, content_store)
        context = await service.retrieve_context("project-ml", "GPU training on Kubernetes clusters", ocean_theme)

        # the ocean theme is orthogonal to every document; the query matches two of three
        assert context.theme_embedding == concept_vector(build_theme_text(ocean_theme))
        assert context.average_similarity == pytest.approx(2 / 3)

    async def test_mmr_prefers_diverse_context(self, adapter, content_store, ml_theme):
        service = make_service(adapter, content_store, top_k=2)
        context = await service.retrieve_context("project-ml", "GPU training on Kubernetes clusters", ml_theme)

        # doc-mlops duplicates doc-gpu semantically
        assert [d.id for d in context.relevant_documents] == ["doc-gpu", "doc-coffee"]
        assert context.average_similarity == pytest.approx(0.5)

    async def test_short_query_uses_semantic(self, adapter, content_store, ml_theme):
        service = make_service(adapter, content_store, top_k=1)
        context = await service.retrieve_context("project-ml", "espresso", ml_theme)

        assert context.method == "semantic"
        assert [d.id for d in context.relevant_documents] == ["doc-coffee"]

    async def test_no_provider_uses_bm25(self, fallback_adapter, content_store, ml_theme):
        service = make_service(fallback_adapter, content_store)
        context = await service.retrieve_context("project-ml", "espresso roast flavor", ml_theme)

        assert context.method == "bm25"
        assert [d.id for d in context.relevant_documents] == ["doc-coffee"]
        assert 0.0 <= context.average_similarity <= 1.0

    async def test_no_lexical_match_without_provider_is_theme_only(self, fallback_adapter, content_store, ml_theme):
        service = make_service(fallback_adapter, content_store)
        context = await service.retrieve_context("project-ml", "seaweed weaving patterns", ml_theme)

        assert context.method == "theme_only"
        assert context.relevant_documents == []
        assert context.average_similarity == 0.0
        assert context.similar_summaries == [build_theme_text(ml_theme)]

    async def test_empty_corpus_is_theme_only(self, adapter, content_store, ocean_theme):
        service = make_service(adapter, content_store)
        context = await service.retrieve_context("project-new", "coral weaving campaign", ocean_theme)

        assert context is not None
        assert context.method == "theme_only"
        assert context.average_similarity == 0.0
        assert context.theme_embedding == concept_vector(build_theme_text(ocean_theme))

    async def test_store_failure_treated_as_empty(self, adapter, ml_theme):
        service = make_service(adapter, BrokenContentStore())
        context = await service.retrieve_context("project-ml", "GPU training", ml_theme)
        assert context.method == "theme_only"

    async def test_embeddings_persisted_after_retrieval(self, adapter, content_store, ml_theme):
        service = make_service(adapter, content_store)
        await service.retrieve_context("project-ml", "GPU training on Kubernetes clusters", ml_theme)

        assert await content_store.get_embedding("doc-gpu") == concept_vector(
            "Scale GPU training jobs on Kubernetes clusters with one command."
        )

    async def test_ranking_failure_raises_retrieval_error(self, adapter, content_store, ml_theme):
        service = make_service(adapter, content_store)

        def broken_rank(query, documents):
            raise RuntimeError("index corrupted")

        service.bm25.rank = broken_rank
        with pytest.raises(RetrievalError):
            await service.retrieve_context("project-ml", "GPU training on Kubernetes", ml_theme)

    async def test_context_is_immutable(self, adapter, content_store, ml_theme):
        context = await make_service(adapter, content_store).retrieve_context("project-ml", "GPU", ml_theme)
        with pytest.raises(Exception):
            context.method = "bm25"
