"""
Retrieval data types and per-stage configuration
"""

from typing import Dict, Any, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from core.config import settings

RetrievalMethod = Literal["hybrid", "semantic", "bm25", "theme_only"]


class Document(BaseModel):
    """Prior content for a project, optionally with a cached embedding"""
    id: str
    text: str
    media_type: str = "text"
    embedding: Optional[List[float]] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ScoredDocument(BaseModel):
    """Document with the score a single ranking method gave it"""
    document: Document
    score: float


class RankedCandidate(BaseModel):
    """
    Candidate carried through fusion and diversity selection.

    Internal to the retrieval service; ranks are 1-based and None when the
    method did not rank the document.
    """
    document: Document
    lexical_rank: Optional[int] = None
    semantic_rank: Optional[int] = None
    semantic_similarity: float = 0.0
    fused_score: float = 0.0


class RetrievalContext(BaseModel):
    """
    Retrieval output for one generation request.

    Created once and never mutated afterwards.
    """
    model_config = ConfigDict(frozen=True)

    relevant_documents: List[Document] = Field(default_factory=list)
    similar_summaries: List[str] = Field(default_factory=list)
    theme_embedding: List[float] = Field(default_factory=list)
    average_similarity: float = Field(default=0.0, ge=0.0, le=1.0)
    method: RetrievalMethod = "theme_only"


class BM25Config(BaseModel):
    """BM25 parameters"""
    k1: float = Field(default=1.5, ge=0.0)
    b: float = Field(default=0.75, ge=0.0, le=1.0)

    @classmethod
    def from_settings(cls) -> "BM25Config":
        return cls(k1=settings.bm25_k1, b=settings.bm25_b)


class RetrievalConfig(BaseModel):
    """Hybrid retrieval options"""
    rrf_k: int = Field(default=60, ge=0)
    mmr_lambda: float = Field(default=0.7, ge=0.0, le=1.0)
    top_k: int = Field(default=5, ge=0)
    candidate_pool_size: int = Field(default=20, ge=1)
    min_query_terms: int = Field(default=2, ge=0)
    persist_embeddings: bool = True
    bm25: BM25Config = Field(default_factory=BM25Config)

    @classmethod
    def from_settings(cls) -> "RetrievalConfig":
        return cls(
            rrf_k=settings.retrieval_rrf_k,
            mmr_lambda=settings.retrieval_mmr_lambda,
            top_k=settings.retrieval_top_k,
            candidate_pool_size=settings.retrieval_candidate_pool_size,
            min_query_terms=settings.retrieval_min_query_terms,
            persist_embeddings=settings.retrieval_persist_embeddings,
            bm25=BM25Config.from_settings(),
        )
