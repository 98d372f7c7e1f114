"""
In-memory storage collaborators (tests, CLI, single-process use)
"""

import logging
from typing import Dict, List, Optional

from core.exceptions import StorageError
from domain.brand.types import Project, Theme
from domain.rag.retrieval.types import Document
from storage.base import BaseContentStore, BaseMetadataStore

logger = logging.getLogger(__name__)


class InMemoryContentStore(BaseContentStore):
    """Documents grouped by project, embeddings kept in a separate cache"""

    def __init__(self):
        self._documents: Dict[str, Document] = {}
        self._project_index: Dict[str, List[str]] = {}
        self._embeddings: Dict[str, List[float]] = {}

    def add_document(self, project_id: str, document: Document) -> None:
        """Register a document under a project; a carried embedding is cached too"""
        if document.id in self._documents:
            raise StorageError(f"Document already exists: {document.id}")
        stored = document.model_copy(
            update={"embedding": None, "metadata": {**document.metadata, "project_id": project_id}}
        )
        self._documents[document.id] = stored
        self._project_index.setdefault(project_id, []).append(document.id)
        if document.embedding:
            self._embeddings[document.id] = list(document.embedding)

    def _with_embedding(self, document: Document) -> Document:
        embedding = self._embeddings.get(document.id)
        if embedding is None:
            return document.model_copy(deep=True)
        return document.model_copy(update={"embedding": list(embedding)}, deep=True)

    async def list_project_documents(self, project_id: str) -> List[Document]:
        ids = self._project_index.get(project_id, [])
        return [self._with_embedding(self._documents[doc_id]) for doc_id in ids]

    async def get_document(self, content_id: str) -> Optional[Document]:
        document = self._documents.get(content_id)
        return self._with_embedding(document) if document else None

    async def get_embedding(self, content_id: str) -> Optional[List[float]]:
        embedding = self._embeddings.get(content_id)
        return list(embedding) if embedding is not None else None

    async def save_embedding(self, content_id: str, embedding: List[float]) -> None:
        if content_id not in self._documents:
            raise StorageError(f"Unknown content id: {content_id}")
        self._embeddings[content_id] = list(embedding)
        logger.debug(f"Cached embedding for {content_id}")


class InMemoryMetadataStore(BaseMetadataStore):
    """Themes and projects held in dicts"""

    def __init__(self, themes: Optional[List[Theme]] = None, projects: Optional[List[Project]] = None):
        self._themes: Dict[str, Theme] = {}
        self._projects: Dict[str, Project] = {}
        for theme in themes or []:
            self.add_theme(theme)
        for project in projects or []:
            self.add_project(project)

    def add_theme(self, theme: Theme) -> None:
        if not theme.id:
            raise StorageError("Theme must have an id")
        self._themes[theme.id] = theme

    def add_project(self, project: Project) -> None:
        if not project.id:
            raise StorageError("Project must have an id")
        self._projects[project.id] = project

    async def get_theme(self, theme_id: str) -> Optional[Theme]:
        return self._themes.get(theme_id)

    async def get_project(self, project_id: str) -> Optional[Project]:
        return self._projects.get(project_id)
