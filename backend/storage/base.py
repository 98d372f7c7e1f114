"""
Abstract base classes for storage collaborators
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from domain.brand.types import Project, Theme
from domain.rag.retrieval.types import Document


class BaseContentStore(ABC):
    """Prior content per project plus a content-id keyed embedding cache"""

    @abstractmethod
    async def list_project_documents(self, project_id: str) -> List[Document]:
        """
        All prior documents for a project.

        Returns:
            Documents with `embedding` populated where one is cached
        """
        pass

    @abstractmethod
    async def get_document(self, content_id: str) -> Optional[Document]:
        """Get one document by content id"""
        pass

    @abstractmethod
    async def get_embedding(self, content_id: str) -> Optional[List[float]]:
        """Get the cached embedding for a content id"""
        pass

    @abstractmethod
    async def save_embedding(self, content_id: str, embedding: List[float]) -> None:
        """Store (or replace) the cached embedding for a content id"""
        pass


class BaseMetadataStore(ABC):
    """Read-only theme / project metadata"""

    @abstractmethod
    async def get_theme(self, theme_id: str) -> Optional[Theme]:
        """Get theme by id"""
        pass

    @abstractmethod
    async def get_project(self, project_id: str) -> Optional[Project]:
        """Get project by id"""
        pass
