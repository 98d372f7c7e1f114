"""
Shared fixtures: embedding adapters, in-memory stores, sample brand data
"""

import pytest

from domain.brand.types import Project, Theme
from domain.rag.embedding.adapter import EmbeddingAdapter
from domain.rag.retrieval.types import Document
from storage.memory_store import InMemoryContentStore, InMemoryMetadataStore
from tests.fakes import DIMENSIONS, KeywordEmbeddingProvider


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


@pytest.fixture
def keyword_provider():
    return KeywordEmbeddingProvider()


@pytest.fixture
def adapter(keyword_provider):
    """Adapter backed by the keyword provider"""
    return EmbeddingAdapter(provider=keyword_provider, dimensions=DIMENSIONS, timeout=1.0)


@pytest.fixture
def fallback_adapter():
    """Adapter with no provider: deterministic embeddings only"""
    return EmbeddingAdapter(provider=None, dimensions=DIMENSIONS)


@pytest.fixture
def ml_theme():
    return Theme(
        id="theme-ml",
        name="Compute Cloud",
        tags=["Kubernetes", "GPU", "MLOps"],
        inspirations=["cloud native clusters"],
    )


@pytest.fixture
def ml_project():
    return Project(
        id="project-ml",
        name="Forge",
        description="MLOps platform for GPU training on Kubernetes",
        goals="Grow adoption of the GPU platform",
        customer_type="Platform engineers",
    )


@pytest.fixture
def ocean_theme():
    return Theme(
        id="theme-ocean",
        name="Ocean Loom",
        tags=["seaweed", "coral", "weaving"],
        inspirations=["tide pools", "coral reefs"],
    )


@pytest.fixture
def ocean_project():
    return Project(
        id="project-ocean",
        name="Reef Threads",
        description="Handmade coastal textiles",
        goals="Celebrate ocean craft",
        customer_type="Eco-conscious shoppers",
    )


@pytest.fixture
def ml_content():
    return (
        "Our Kubernetes GPU training platform helps teams schedule distributed MLOps "
        "pipelines across cloud clusters. Engineers monitor experiments, manage shared "
        "resources, and deploy production models reliably."
    )


@pytest.fixture
def content_store():
    store = InMemoryContentStore()
    store.add_document("project-ml", Document(
        id="doc-gpu",
        text="Scale GPU training jobs on Kubernetes clusters with one command.",
    ))
    store.add_document("project-ml", Document(
        id="doc-coffee",
        text="Our espresso roast brings bold flavor to every morning cup.",
    ))
    store.add_document("project-ml", Document(
        id="doc-mlops",
        text="MLOps pipelines that move models from notebook to production.",
        metadata={"prompt": "MLOps pipeline announcement"},
    ))
    return store


@pytest.fixture
def metadata_store(ml_theme, ml_project, ocean_theme, ocean_project):
    return InMemoryMetadataStore(themes=[ml_theme, ocean_theme], projects=[ml_project, ocean_project])
