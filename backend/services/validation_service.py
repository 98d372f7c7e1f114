"""
Validation service - validate stored content against its brand
"""

import logging
from typing import Optional
from domain.evaluation.brand_validator import BrandConsistencyValidator
from domain.evaluation.types import ValidationResult
from storage.base import BaseContentStore, BaseMetadataStore
from services.base import BaseService
from core.exceptions import StorageError

logger = logging.getLogger(__name__)


class ValidationService(BaseService):
    """Loads content, theme and project from the stores and runs the validator"""

    def __init__(
        self,
        validator: BrandConsistencyValidator,
        content_store: BaseContentStore,
        metadata_store: BaseMetadataStore,
    ):
        self.validator = validator
        self.content_store = content_store
        self.metadata_store = metadata_store

    async def validate_content(
        self,
        content_id: str,
        theme_id: Optional[str] = None,
        project_id: Optional[str] = None,
    ) -> ValidationResult:
        """
        Validate one stored content item.

        Args:
            content_id: Stored content id
            theme_id: Theme to validate against; defaults to the content's `theme_id` metadata
            project_id: Project context; defaults to the content's `project_id` metadata

        Raises:
            StorageError: If the content, theme or project cannot be found
        """
        document = await self.content_store.get_document(content_id)
        if document is None:
            raise StorageError(f"Content not found: {content_id}")

        theme_id = theme_id or document.metadata.get("theme_id")
        if not theme_id:
            raise StorageError(f"No theme associated with content {content_id}")
        theme = await self.metadata_store.get_theme(theme_id)
        if theme is None:
            raise StorageError(f"Theme not found: {theme_id}")

        project = None
        project_id = project_id or document.metadata.get("project_id")
        if project_id:
            project = await self.metadata_store.get_project(project_id)
            if project is None:
                raise StorageError(f"Project not found: {project_id}")

        logger.info(f"Validating content {content_id} against theme {theme_id}")
        return await self.validator.validate(document.text, theme, project)
