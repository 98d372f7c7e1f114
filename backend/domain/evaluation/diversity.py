"""
Variant diversity: pairwise similarity and duplicate detection
"""

import logging
from itertools import combinations
from typing import Any, List, Optional, Sequence, Tuple

from domain.evaluation.content_analysis import get_words
from domain.evaluation.types import DiversityConfig, DiversityReport
from domain.rag.embedding.adapter import EmbeddingAdapter
from domain.rag.retrieval.similarity import cosine_similarity_matrix, jaccard_similarity

# Absorbs float drift so a similarity equal to the threshold counts as duplicate
_THRESHOLD_EPSILON = 1e-9


def _require_variants(variants: Any) -> List[str]:
    if not isinstance(variants, (list, tuple)):
        raise TypeError(f"variants must be a list of strings, got {type(variants).__name__}")
    for i, variant in enumerate(variants):
        if not isinstance(variant, str):
            raise TypeError(f"variant {i} must be a string, got {type(variant).__name__}")
    return list(variants)


def build_report(
    n_variants: int,
    pair_similarities: Sequence[Tuple[int, int, float]],
    threshold: float,
    method: str,
) -> DiversityReport:
    """Aggregate (i, j, similarity) pairs into a DiversityReport"""
    duplicate_pairs = [
        (i, j) for i, j, sim in pair_similarities if sim >= threshold - _THRESHOLD_EPSILON
    ]
    sims = [sim for _, _, sim in pair_similarities]
    average = sum(sims) / len(sims) if sims else 0.0
    duplicate_indices = {idx for pair in duplicate_pairs for idx in pair}

    return DiversityReport(
        diversity_score=int(max(0, min(100, round((1 - average) * 100)))),
        method=method,
        unique_variant_count=n_variants - len(duplicate_indices),
        duplicate_pairs=duplicate_pairs,
        average_pairwise_similarity=round(average, 2),
    )


class DiversityAnalyzer:
    """
    Detects near-duplicate variants.

    Semantic similarity uses embeddings; when any variant's embedding could
    not come from the provider, the whole set is compared lexically instead
    (Jaccard over word sets) so all pairs share one similarity scale.
    """

    def __init__(
        self,
        embedding_adapter: EmbeddingAdapter,
        config: Optional[DiversityConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.embedding_adapter = embedding_adapter
        self.config = config or DiversityConfig.from_settings()
        self.logger = logger or logging.getLogger(__name__)

    def analyze_lexical(self, variants: List[str], threshold: Optional[float] = None) -> DiversityReport:
        """Jaccard-based diversity (default threshold 0.7)"""
        variants = _require_variants(variants)
        threshold = self.config.lexical_threshold if threshold is None else threshold

        if len(variants) < 2:
            return DiversityReport(method="lexical", unique_variant_count=len(variants))

        word_sets = [{w.lower() for w in get_words(v)} for v in variants]
        pairs = [
            (i, j, jaccard_similarity(word_sets[i], word_sets[j]))
            for i, j in combinations(range(len(variants)), 2)
        ]
        report = build_report(len(variants), pairs, threshold, "lexical")
        self.logger.info(
            f"Lexical diversity score: {report.diversity_score}, duplicates: {len(report.duplicate_pairs)}"
        )
        return report

    async def analyze(
        self,
        variants: List[str],
        threshold: Optional[float] = None,
        lexical_threshold: Optional[float] = None,
    ) -> DiversityReport:
        """
        Semantic diversity with lexical fallback.

        Zero or one variant returns diversity 100 without calling the embedding provider.

        Args:
            variants: Variant texts
            threshold: Cosine duplicate threshold (defaults to config.duplicate_threshold)
            lexical_threshold: Jaccard threshold used when falling back to lexical
                analysis (defaults to config.lexical_threshold)

        Raises:
            TypeError: If variants is not a list of strings
        """
        variants = _require_variants(variants)
        threshold = self.config.duplicate_threshold if threshold is None else threshold

        if len(variants) < 2:
            return DiversityReport(method="semantic", unique_variant_count=len(variants))

        try:
            results = await self.embedding_adapter.embed_many(variants, "document")
        except Exception as e:
            self.logger.warning(f"Variant embedding failed ({e}); using lexical diversity")
            return self.analyze_lexical(variants, lexical_threshold)

        if any(result.degraded for result in results):
            self.logger.warning("Variant embeddings degraded; using lexical diversity")
            return self.analyze_lexical(variants, lexical_threshold)

        matrix = cosine_similarity_matrix([result.embedding for result in results])
        pairs = [
            (i, j, float(matrix[i][j]))
            for i, j in combinations(range(len(variants)), 2)
        ]
        report = build_report(len(variants), pairs, threshold, "semantic")
        self.logger.info(
            f"Semantic diversity score: {report.diversity_score}, duplicates: {len(report.duplicate_pairs)}"
        )
        return report
