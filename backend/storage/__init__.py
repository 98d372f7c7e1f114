"""
Storage collaborators
"""

from storage.base import BaseContentStore, BaseMetadataStore
from storage.memory_store import InMemoryContentStore, InMemoryMetadataStore

__all__ = [
    "BaseContentStore",
    "BaseMetadataStore",
    "InMemoryContentStore",
    "InMemoryMetadataStore",
]
