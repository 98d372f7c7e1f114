"""
Tests for component wiring, the in-memory stores and the CLI entry point
"""

import json

import pytest

import main
from core.config import settings
from core.exceptions import StorageError
from core.startup import cleanup_pipeline, create_embedding_provider, initialize_pipeline
from domain.rag.retrieval.types import Document
from storage.memory_store import InMemoryContentStore, InMemoryMetadataStore
from tests.fakes import KeywordEmbeddingProvider, StubGenerator


def full_size_provider():
    return KeywordEmbeddingProvider(dimensions=settings.embedding_dimensions)


# ---------------------------------------------------------------------------
# STARTUP
# ---------------------------------------------------------------------------


class TestStartup:

    def test_no_jina_key_means_fallback(self, monkeypatch):
        monkeypatch.setattr(settings, "jina_api_key", "")
        assert create_embedding_provider() is None

    async def test_initialize_and_run(self, ml_theme, ml_project):
        generator = StubGenerator(["GPU clusters scale training for every team."])
        provider = full_size_provider()
        components = initialize_pipeline(generator=generator, embedding_provider=provider)

        result = await components.pipeline.execute({
            "prompt": "GPU launch", "theme": ml_theme, "project": ml_project, "variantCount": 1,
        })
        assert result.variants[0].rank == 1
        assert result.metadata.retrieval_context.method == "theme_only"

        await cleanup_pipeline(components)
        assert generator.closed
        assert provider.closed

    async def test_services_share_stores(self, content_store, metadata_store):
        components = initialize_pipeline(
            content_store=content_store,
            metadata_store=metadata_store,
            generator=StubGenerator([]),
            embedding_provider=full_size_provider(),
        )
        result = await components.validation_service.validate_content("doc-gpu", theme_id="theme-ml")
        assert result.brand_consistency_score == 100


# ---------------------------------------------------------------------------
# IN-MEMORY STORES
# ---------------------------------------------------------------------------


class TestMemoryStores:

    async def test_documents_scoped_by_project(self, content_store):
        assert [d.id for d in await content_store.list_project_documents("project-ml")] == [
            "doc-gpu", "doc-coffee", "doc-mlops",
        ]
        assert await content_store.list_project_documents("other") == []

    async def test_carried_embedding_cached(self):
        store = InMemoryContentStore()
        store.add_document("p", Document(id="d", text="t", embedding=[1.0, 0.0]))

        assert await store.get_embedding("d") == [1.0, 0.0]
        assert (await store.get_document("d")).embedding == [1.0, 0.0]

    async def test_returned_documents_are_copies(self, content_store):
        document = await content_store.get_document("doc-gpu")
        document.metadata["edited"] = True
        assert "edited" not in (await content_store.get_document("doc-gpu")).metadata

    async def test_listed_documents_are_copies(self):
        store = InMemoryContentStore()
        store.add_document("p", Document(id="d", text="t", metadata={"tone": "calm"}, embedding=[1.0, 0.0]))

        listed = await store.list_project_documents("p")
        listed[0].metadata["edited"] = True
        listed[0].embedding.append(9.0)

        again = (await store.list_project_documents("p"))[0]
        assert "edited" not in again.metadata
        assert 9.0 not in again.embedding

    def test_duplicate_document_rejected(self, content_store):
        with pytest.raises(StorageError):
            content_store.add_document("project-ml", Document(id="doc-gpu", text="again"))

    async def test_unknown_embedding_target(self):
        with pytest.raises(StorageError):
            await InMemoryContentStore().save_embedding("missing", [0.1])

    def test_theme_requires_id(self, ocean_theme):
        with pytest.raises(StorageError):
            InMemoryMetadataStore(themes=[ocean_theme.model_copy(update={"id": None})])


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_files(tmp_path, ml_theme, ml_project):
    theme_path = tmp_path / "theme.json"
    project_path = tmp_path / "project.json"
    history_path = tmp_path / "history.json"
    theme_path.write_text(ml_theme.model_dump_json())
    project_path.write_text(ml_project.model_dump_json())
    history_path.write_text(json.dumps([
        {"id": "h1", "text": "Scale GPU training jobs on Kubernetes clusters with one command."},
        {"id": "h2", "text": "MLOps pipelines that move models from notebook to production."},
    ]))
    return theme_path, project_path, history_path


class TestCLI:

    def test_prints_result_json(self, monkeypatch, capsys, cli_files):
        theme_path, project_path, history_path = cli_files

        def wire(content_store):
            return initialize_pipeline(
                content_store=content_store,
                generator=StubGenerator(["Kubernetes GPU clusters, ready today.", "Espresso for engineers."]),
                embedding_provider=full_size_provider(),
            )

        monkeypatch.setattr(main, "initialize_pipeline", wire)
        code = main.main([
            "--prompt", "GPU training launch",
            "--theme", str(theme_path),
            "--project", str(project_path),
            "--variants", "2",
            "--history", str(history_path),
        ])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert len(output["variants"]) == 2
        assert output["metadata"]["rag_content_count"] == 2

    def test_missing_llm_key_exits_2(self, monkeypatch, cli_files):
        theme_path, project_path, _ = cli_files
        monkeypatch.setattr(settings, "groq_api_key", "")
        monkeypatch.setattr(settings, "jina_api_key", "")
        monkeypatch.delenv("GROQ_API_KEY", raising=False)

        code = main.main(["--prompt", "x", "--theme", str(theme_path), "--project", str(project_path)])
        assert code == 2

    def test_blank_prompt_exits_2(self, monkeypatch, cli_files):
        theme_path, project_path, _ = cli_files
        monkeypatch.setattr(
            main,
            "initialize_pipeline",
            lambda content_store: initialize_pipeline(
                content_store=content_store, generator=StubGenerator([]), embedding_provider=full_size_provider()
            ),
        )
        code = main.main(["--prompt", "  ", "--theme", str(theme_path), "--project", str(project_path)])
        assert code == 2
