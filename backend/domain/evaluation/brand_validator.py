"""
Brand-consistency validation of generated content
"""

import logging
import re
from typing import List, Optional

from domain.brand.types import Project, Theme
from domain.evaluation.quality import score_text_quality
from domain.evaluation.types import Issue, ValidationConfig, ValidationResult
from domain.rag.embedding.adapter import EmbeddingAdapter
from domain.rag.retrieval.similarity import cosine_similarity

BRAND_WEIGHT = 0.6
QUALITY_WEIGHT = 0.4

_REPEATED_EXCLAMATION_RE = re.compile(r"!{2,}")
_SHORT_CONTENT_CHARS = 50


def overall_score(brand_consistency_score: int, quality_score: int) -> int:
    """round(0.6 * brand + 0.4 * quality)"""
    return int(round(BRAND_WEIGHT * brand_consistency_score + QUALITY_WEIGHT * quality_score))


def brand_reference_texts(theme: Theme, project: Optional[Project] = None) -> List[str]:
    """
    Reference strings describing the brand.

    Built from the theme name and tags, inspirations, and the project's
    description, goals and target customer type; empty fields are skipped.
    """
    texts = []
    tags = [t for t in theme.tags if t]
    if theme.name and tags:
        texts.append(f"{theme.name}: {', '.join(tags)}")
    elif theme.name:
        texts.append(theme.name)
    elif tags:
        texts.append(", ".join(tags))

    inspirations = [i for i in theme.inspirations if i]
    if inspirations:
        texts.append(f"Inspired by: {', '.join(inspirations)}")

    if project is not None:
        if project.description:
            texts.append(project.description)
        if project.goals:
            texts.append(f"Goals: {project.goals}")
        if project.customer_type:
            texts.append(f"Target audience: {project.customer_type}")
    return texts


def summarize(score: int) -> str:
    if score >= 85:
        return "Excellent content that aligns well with brand guidelines."
    if score >= 70:
        return "Good content with minor improvements possible."
    if score >= 50:
        return "Content needs revision to better align with brand."
    return "Content significantly deviates from brand guidelines."


class BrandConsistencyValidator:
    """Scores content against embedded brand reference texts"""

    def __init__(
        self,
        embedding_adapter: EmbeddingAdapter,
        config: Optional[ValidationConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.embedding_adapter = embedding_adapter
        self.config = config or ValidationConfig.from_settings()
        if self.config.similarity_ceiling <= self.config.similarity_floor:
            raise ValueError("similarity_ceiling must be greater than similarity_floor")
        self.logger = logger or logging.getLogger(__name__)

    def _scale(self, mean_similarity: float) -> int:
        floor, ceiling = self.config.similarity_floor, self.config.similarity_ceiling
        fraction = (mean_similarity - floor) / (ceiling - floor)
        return int(round(100 * max(0.0, min(1.0, fraction))))

    async def brand_consistency_score(self, content: str, references: List[str]) -> int:
        """round(100 * mean cosine) between content and each reference; 0 without references"""
        if not references:
            return 0

        content_embedding = await self.embedding_adapter.embed(content, "document")
        reference_results = await self.embedding_adapter.embed_many(references, "document")
        similarities = [
            cosine_similarity(content_embedding, result.embedding) for result in reference_results
        ]
        mean_similarity = sum(similarities) / len(similarities)
        self.logger.debug(f"Brand similarity mean {mean_similarity:.3f} over {len(similarities)} references")
        return self._scale(mean_similarity)

    async def validate(
        self,
        content: str,
        theme: Theme,
        project: Optional[Project] = None,
        quality_score: Optional[int] = None,
    ) -> ValidationResult:
        """
        Validate content against the brand.

        Args:
            content: Content text
            theme: Brand theme
            project: Project metadata (description, goals, customer type)
            quality_score: Precomputed quality; scored here when omitted

        Returns:
            ValidationResult with scores, insights and summary
        """
        if not isinstance(content, str):
            raise TypeError(f"content must be a string, got {type(content).__name__}")

        references = brand_reference_texts(theme, project)
        brand_score = await self.brand_consistency_score(content, references)
        quality = score_text_quality(content) if quality_score is None else int(quality_score)
        overall = overall_score(brand_score, quality)

        strengths, issues, recommendations = self._insights(content, brand_score, quality, theme, project)
        self.logger.info(f"Validation: brand {brand_score}, quality {quality}, overall {overall}")

        return ValidationResult(
            brand_consistency_score=brand_score,
            quality_score=quality,
            overall_score=overall,
            passes=overall >= self.config.pass_threshold,
            strengths=strengths,
            issues=issues,
            recommendations=recommendations,
            summary=summarize(overall),
            brand_reference_count=len(references),
        )

    def _insights(
        self,
        content: str,
        brand_score: int,
        quality: int,
        theme: Theme,
        project: Optional[Project],
    ):
        strengths: List[str] = []
        issues: List[Issue] = []
        recommendations: List[str] = []

        if brand_score >= 80:
            strengths.append("Strong alignment with brand guidelines")
        elif brand_score < 60:
            tags = ", ".join(theme.tags[:3]) or "core brand themes"
            issues.append(Issue(
                severity="major",
                category="brand_alignment",
                description="Content does not strongly reflect brand identity",
                suggestion=f"Incorporate: {tags}",
            ))

        if quality >= 80:
            strengths.append("High-quality content with good structure")
        elif quality < 60:
            issues.append(Issue(
                severity="major",
                category="clarity",
                description="Content quality is below expectations",
                suggestion="Improve sentence structure and word choice",
            ))

        if _REPEATED_EXCLAMATION_RE.search(content):
            issues.append(Issue(
                severity="minor",
                category="tone",
                description="Excessive punctuation detected",
                suggestion="Use single exclamation marks for a professional tone",
            ))

        if len(content.strip()) < _SHORT_CONTENT_CHARS:
            issues.append(Issue(
                severity="minor",
                category="clarity",
                description="Content is very short",
                suggestion="Expand with more detail about the offering",
            ))

        if brand_score < 80 and theme.inspirations:
            recommendations.append(f"Reference: {', '.join(theme.inspirations[:2])}")

        customer_type = (project.customer_type or "").strip() if project else ""
        if customer_type:
            audience_word = customer_type.split()[0].lower()
            if audience_word not in content.lower():
                recommendations.append(f"Tailor messaging more explicitly to {customer_type}")

        if not strengths:
            strengths.append("Meets basic requirements")
        if not recommendations:
            recommendations.append("Content is well-aligned")

        return strengths, issues, recommendations
