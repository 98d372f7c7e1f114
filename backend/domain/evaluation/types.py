"""
Scoring, diversity, ranking and validation data types
"""

from typing import Dict, List, Literal, Optional, Tuple
from pydantic import BaseModel, Field
from core.config import settings


class MarketingReadability(BaseModel):
    score: int = 0
    power_word_count: int = 0
    has_cta: bool = False
    scannability_score: int = 0
    level: Literal["weak", "moderate", "strong"] = "weak"


class Readability(BaseModel):
    score: int = 0  # Flesch reading ease, clamped to 0-100
    grade_level: float = 0.0  # Flesch-Kincaid
    level: Literal["easy", "moderate", "difficult", "unknown"] = "unknown"


class MarketingTone(BaseModel):
    urgency_score: int = 0
    benefit_score: int = 0
    social_proof_score: int = 0
    emotional_appeal: int = 0
    overall_persuasion: int = 0
    label: Literal["weak", "moderate", "strong"] = "weak"


class KeywordCount(BaseModel):
    word: str
    count: int


class KeywordDensity(BaseModel):
    brand_keyword_count: int = 0
    brand_keyword_percentage: float = 0.0
    top_keywords: List[KeywordCount] = Field(default_factory=list)


class Sentiment(BaseModel):
    score: float = 0.0  # -1 (negative) to 1 (positive)
    label: Literal["negative", "neutral", "positive"] = "neutral"
    confidence: float = 0.0


class Structure(BaseModel):
    sentence_count: int = 1
    word_count: int = 0
    avg_sentence_length: int = 0
    paragraph_count: int = 0


class ContentAnalysis(BaseModel):
    """Full heuristic analysis of one piece of content"""
    readability: MarketingReadability = Field(default_factory=MarketingReadability)
    reading_ease: Readability = Field(default_factory=Readability)
    tone: MarketingTone = Field(default_factory=MarketingTone)
    keyword_density: KeywordDensity = Field(default_factory=KeywordDensity)
    sentiment: Sentiment = Field(default_factory=Sentiment)
    structure: Structure = Field(default_factory=Structure)


class DiversityConfig(BaseModel):
    duplicate_threshold: float = Field(default=0.85, ge=0.0, le=1.0)  # semantic
    lexical_threshold: float = Field(default=0.7, ge=0.0, le=1.0)  # Jaccard fallback

    @classmethod
    def from_settings(cls) -> "DiversityConfig":
        return cls(
            duplicate_threshold=settings.diversity_duplicate_threshold,
            lexical_threshold=settings.lexical_duplicate_threshold,
        )


class DiversityReport(BaseModel):
    """Pairwise diversity of a set of generated variants"""
    diversity_score: int = Field(default=100, ge=0, le=100)
    method: Literal["semantic", "lexical"] = "semantic"
    unique_variant_count: int = 0
    duplicate_pairs: List[Tuple[int, int]] = Field(default_factory=list)
    average_pairwise_similarity: float = 0.0


class RankingWeights(BaseModel):
    """Weight per ranking factor; factors are on a 0-100 scale"""
    base_quality: float = 0.3
    marketing_readability: float = 0.2
    marketing_tone: float = 0.2
    brand_keywords: float = 0.15
    structure: float = 0.15

    def as_dict(self) -> Dict[str, float]:
        return self.model_dump()


class VariantRanking(BaseModel):
    index: int
    composite_score: float = 0.0
    factors: Dict[str, float] = Field(default_factory=dict)


class Issue(BaseModel):
    severity: Literal["minor", "major", "critical"]
    category: Literal["brand_alignment", "tone", "grammar", "clarity", "other"]
    description: str
    suggestion: str


class ValidationConfig(BaseModel):
    pass_threshold: int = Field(default=70, ge=0, le=100)
    # Mean cosine at or below floor maps to 0, at or above ceiling to 100
    similarity_floor: float = Field(default=0.0, ge=-1.0, le=1.0)
    similarity_ceiling: float = Field(default=1.0, ge=-1.0, le=1.0)

    @classmethod
    def from_settings(cls) -> "ValidationConfig":
        return cls(
            pass_threshold=settings.validation_pass_threshold,
            similarity_floor=settings.brand_similarity_floor,
            similarity_ceiling=settings.brand_similarity_ceiling,
        )


class ValidationResult(BaseModel):
    brand_consistency_score: int = Field(ge=0, le=100)
    quality_score: int = Field(ge=0, le=100)
    overall_score: int = Field(ge=0, le=100)
    passes: bool
    strengths: List[str] = Field(default_factory=list)
    issues: List[Issue] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    summary: str = ""
    brand_reference_count: int = 0
    error: Optional[str] = None


class RankedContent(BaseModel):
    """Stored content scored against its brand"""
    content_id: str
    rank: int = 0
    overall_score: int = 0
    brand_consistency_score: int = 0
    quality_score: int = 0
    passes: bool = False
    recommendation: str = ""
    error: Optional[str] = None


class RankingSummary(BaseModel):
    total_ranked: int = 0
    top_score: int = 0
    average_score: int = 0


class RankingReport(BaseModel):
    ranked: List[RankedContent] = Field(default_factory=list)
    summary: RankingSummary = Field(default_factory=RankingSummary)
