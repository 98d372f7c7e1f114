"""
Generation pipeline request / result types
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from domain.brand.types import Project, Theme, ThemeAnalysis
from domain.evaluation.types import ContentAnalysis, DiversityReport, ValidationResult
from domain.rag.retrieval.types import RetrievalContext

PIPELINE_STAGES = [
    "theme_analysis",
    "rag_retrieval",
    "prompt_enhancement",
    "quality_prediction",
    "ai_generation",
    "quality_scoring",
    "content_analysis",
    "diversity_analysis",
    "variant_ranking",
    "brand_validation",
]

(
    STAGE_THEME_ANALYSIS,
    STAGE_RAG_RETRIEVAL,
    STAGE_PROMPT_ENHANCEMENT,
    STAGE_QUALITY_PREDICTION,
    STAGE_AI_GENERATION,
    STAGE_QUALITY_SCORING,
    STAGE_CONTENT_ANALYSIS,
    STAGE_DIVERSITY_ANALYSIS,
    STAGE_VARIANT_RANKING,
    STAGE_BRAND_VALIDATION,
) = PIPELINE_STAGES


class GenerationRequest(BaseModel):
    """Input to GenerationPipeline.execute; accepts snake_case or camelCase keys"""
    model_config = ConfigDict(populate_by_name=True)

    prompt: Any  # validated by the pipeline, which rejects non-text
    theme: Theme
    project: Project
    variant_count: Optional[int] = Field(default=None, ge=0, alias="variantCount")
    media_type: Literal["text", "image"] = Field(default="text", alias="mediaType")
    target_audience: Optional[str] = Field(default=None, alias="targetAudience")
    style_preferences: Dict[str, Any] = Field(default_factory=dict, alias="stylePreferences")


class GeneratedVariant(BaseModel):
    content: str
    quality_score: int = Field(ge=0, le=100)
    composite_score: Optional[float] = None
    factors: Optional[Dict[str, float]] = None
    rank: int = 0  # 1-based
    original_index: int = 0
    analysis: Optional[ContentAnalysis] = None


class PipelineMetadata(BaseModel):
    retrieval_context: RetrievalContext
    diversity_report: DiversityReport
    pipeline_stages: List[str] = Field(default_factory=list)
    theme_analysis: ThemeAnalysis
    enhanced_prompt: str = ""
    predicted_quality: int = 0
    prompt_quality: int = 0  # user prompt before enhancement
    average_quality: int = 0
    average_composite_score: int = 0
    rag_similarity: int = 0  # percent
    rag_content_count: int = 0
    validation: Optional[ValidationResult] = None
    media_type: str = "text"
    target_audience: str = "general"
    generation_timestamp: datetime
    elapsed_ms: int = 0


class PipelineResult(BaseModel):
    variants: List[GeneratedVariant] = Field(default_factory=list)
    metadata: PipelineMetadata
