"""
Embedding data types
"""

from typing import List, Literal, Optional
from pydantic import BaseModel

# Collaborator-facing task types
TaskType = Literal["document", "query"]

EmbeddingSource = Literal["provider", "fallback"]


class EmbeddingResult(BaseModel):
    """Embedding for one text, with where it came from"""
    text: str
    embedding: List[float]
    task_type: TaskType = "document"
    source: EmbeddingSource = "provider"
    model_embed: Optional[str] = None
    error: Optional[str] = None  # why the provider was bypassed, if it was

    @property
    def degraded(self) -> bool:
        return self.source == "fallback"
