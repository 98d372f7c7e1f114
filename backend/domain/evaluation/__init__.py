"""
Content evaluation: quality, analysis, diversity, ranking, brand validation
"""

from domain.evaluation.quality import score_text_quality, score_image_prompt_quality, score_prompt_quality
from domain.evaluation.content_analysis import (
    analyze_content,
    analyze_keyword_density,
    analyze_marketing_readability,
    analyze_marketing_tone,
    analyze_sentiment,
    analyze_structure,
    calculate_readability,
    count_syllables,
)
from domain.evaluation.diversity import DiversityAnalyzer
from domain.evaluation.ranking import VariantRanker
from domain.evaluation.brand_validator import BrandConsistencyValidator, brand_reference_texts, overall_score
from domain.evaluation.types import (
    ContentAnalysis,
    DiversityConfig,
    DiversityReport,
    Issue,
    RankingWeights,
    Readability,
    ValidationConfig,
    ValidationResult,
    VariantRanking,
)

__all__ = [
    "score_text_quality",
    "score_image_prompt_quality",
    "score_prompt_quality",
    "analyze_content",
    "analyze_keyword_density",
    "analyze_marketing_readability",
    "analyze_marketing_tone",
    "analyze_sentiment",
    "analyze_structure",
    "calculate_readability",
    "count_syllables",
    "DiversityAnalyzer",
    "VariantRanker",
    "BrandConsistencyValidator",
    "brand_reference_texts",
    "overall_score",
    "ContentAnalysis",
    "DiversityConfig",
    "DiversityReport",
    "Issue",
    "Readability",
    "RankingWeights",
    "ValidationConfig",
    "ValidationResult",
    "VariantRanking",
]
