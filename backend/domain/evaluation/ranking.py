"""
Composite ranking of generated variants
"""

import logging
from typing import Dict, List, Optional, Sequence, Union

from domain.evaluation.types import ContentAnalysis, RankingWeights, Structure, VariantRanking

FACTORS = list(RankingWeights.model_fields)


def structure_score(structure: Structure) -> float:
    """Favors up to 200 words and up to 10 sentences, 0-100"""
    length = min(structure.word_count / 2, 100)
    variety = min(structure.sentence_count * 10, 100)
    return 0.5 * length + 0.5 * variety


def factor_values(quality_score: float, analysis: ContentAnalysis) -> Dict[str, float]:
    """Unweighted factor values, each on a 0-100 scale"""
    return {
        "base_quality": float(quality_score),
        "marketing_readability": float(analysis.readability.score),
        "marketing_tone": float(analysis.tone.overall_persuasion),
        "brand_keywords": min(analysis.keyword_density.brand_keyword_percentage * 10, 100.0),
        "structure": structure_score(analysis.structure),
    }


def resolve_weights(weights: Union[RankingWeights, Dict[str, float], None]) -> RankingWeights:
    """Merge caller weights over the defaults; unknown factor names are rejected"""
    if weights is None:
        return RankingWeights()
    if isinstance(weights, RankingWeights):
        return weights
    unknown = set(weights) - set(FACTORS)
    if unknown:
        raise ValueError(f"Unknown ranking factors: {sorted(unknown)}")
    return RankingWeights(**{**RankingWeights().as_dict(), **weights})


class VariantRanker:
    """Weighted-sum ranking with a per-factor breakdown"""

    def __init__(
        self,
        weights: Union[RankingWeights, Dict[str, float], None] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.weights = resolve_weights(weights)
        self.logger = logger or logging.getLogger(__name__)

    def rank(
        self,
        variants: Sequence[str],
        analyses: Sequence[Optional[ContentAnalysis]],
        quality_scores: Sequence[Optional[float]],
        weights: Union[RankingWeights, Dict[str, float], None] = None,
    ) -> List[VariantRanking]:
        """
        Rank variants best first.

        `factors` holds each factor's weighted contribution; composite_score is
        their sum. A variant whose analysis or quality score is missing or
        unusable gets a zero-factor entry, so the output always has exactly one
        entry per variant. Ties are broken by original index.

        Args:
            variants: Variant texts
            analyses: ContentAnalysis per variant (same order)
            quality_scores: Base quality score per variant (same order)
            weights: Optional override of the ranker's weights

        Returns:
            One VariantRanking per variant
        """
        active = resolve_weights(weights) if weights is not None else self.weights
        weight_map = active.as_dict()

        rankings = []
        for index in range(len(variants)):
            try:
                analysis = analyses[index]
                quality = quality_scores[index]
                if analysis is None or quality is None:
                    raise ValueError("missing analysis or quality score")
                values = factor_values(quality, analysis)
                factors = {name: round(values[name] * weight_map[name], 2) for name in FACTORS}
                rankings.append(VariantRanking(
                    index=index,
                    composite_score=round(sum(factors.values()), 2),
                    factors=factors,
                ))
            except (IndexError, ValueError, TypeError, AttributeError) as e:
                self.logger.warning(f"Scoring failed for variant {index}: {e}")
                rankings.append(VariantRanking(
                    index=index,
                    composite_score=0.0,
                    factors={name: 0.0 for name in FACTORS},
                ))

        rankings.sort(key=lambda r: (-r.composite_score, r.index))

        if rankings:
            self.logger.info(
                f"Top variant index: {rankings[0].index}, score: {rankings[0].composite_score}"
            )
        return rankings
