"""
Retrieval pipeline: lexical, semantic, fusion, diversity
"""

from domain.rag.retrieval.bm25 import BM25Scorer
from domain.rag.retrieval.fusion import reciprocal_rank_fusion
from domain.rag.retrieval.mmr import mmr_select
from domain.rag.retrieval.semantic import SemanticRanker
from domain.rag.retrieval.similarity import cosine_similarity, cosine_similarity_matrix, jaccard_similarity
from domain.rag.retrieval.tokenizer import tokenize, STOP_WORDS
from domain.rag.retrieval.types import (
    BM25Config,
    Document,
    RankedCandidate,
    RetrievalConfig,
    RetrievalContext,
    RetrievalMethod,
    ScoredDocument,
)

__all__ = [
    "BM25Scorer",
    "SemanticRanker",
    "reciprocal_rank_fusion",
    "mmr_select",
    "cosine_similarity",
    "cosine_similarity_matrix",
    "jaccard_similarity",
    "tokenize",
    "STOP_WORDS",
    "BM25Config",
    "Document",
    "RankedCandidate",
    "RetrievalConfig",
    "RetrievalContext",
    "RetrievalMethod",
    "ScoredDocument",
]
