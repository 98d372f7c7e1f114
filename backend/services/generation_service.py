"""
Generation pipeline - retrieval-augmented generation, scoring and ranking
PUBLIC ENTRY POINT: GenerationPipeline.execute
"""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union
from pydantic import ValidationError

from domain.brand.cache import ThemeAnalysisCache
from domain.brand.types import Project, Theme, ThemeAnalysis
from domain.evaluation.brand_validator import BrandConsistencyValidator
from domain.evaluation.content_analysis import analyze_content
from domain.evaluation.diversity import DiversityAnalyzer
from domain.evaluation.quality import score_image_prompt_quality, score_prompt_quality, score_text_quality
from domain.evaluation.ranking import FACTORS, VariantRanker
from domain.evaluation.types import ContentAnalysis, ValidationResult, VariantRanking
from domain.generation.generator import BaseContentGenerator
from domain.generation.prompt import PromptComposer
from domain.generation.types import (
    STAGE_AI_GENERATION,
    STAGE_BRAND_VALIDATION,
    STAGE_CONTENT_ANALYSIS,
    STAGE_DIVERSITY_ANALYSIS,
    STAGE_PROMPT_ENHANCEMENT,
    STAGE_QUALITY_PREDICTION,
    STAGE_QUALITY_SCORING,
    STAGE_RAG_RETRIEVAL,
    STAGE_THEME_ANALYSIS,
    STAGE_VARIANT_RANKING,
    GeneratedVariant,
    GenerationRequest,
    PipelineMetadata,
    PipelineResult,
)
from domain.rag.embedding.batch_processor import BatchProcessor
from domain.rag.retrieval.similarity import similarity_to_percent
from domain.rag.retrieval.types import RetrievalContext
from services.base import BaseService
from services.retrieval_service import RetrievalService
from core.config import settings
from core.exceptions import GenerationError, InvalidPromptError


def normalize_rankings(rankings: List[VariantRanking], count: int) -> List[VariantRanking]:
    """
    Exactly one ranking per variant index in [0, count).

    Duplicates and out-of-range indices are dropped; missing indices are
    appended as zero-factor entries.
    """
    seen = set()
    normalized = []
    for ranking in rankings:
        if 0 <= ranking.index < count and ranking.index not in seen:
            seen.add(ranking.index)
            normalized.append(ranking)
    for index in range(count):
        if index not in seen:
            normalized.append(VariantRanking(index=index, factors={name: 0.0 for name in FACTORS}))
    normalized.sort(key=lambda r: (-r.composite_score, r.index))
    return normalized


class GenerationPipeline(BaseService):
    """
    Orchestrates one generation request end to end.

    Stages, in order: theme analysis and retrieval (concurrently), prompt
    enhancement, quality prediction, generation, quality scoring, content
    analysis, diversity analysis, ranking, brand validation of the top variant.
    Only an invalid prompt or a generation that yields nothing fails the
    request; every other stage degrades.
    """

    def __init__(
        self,
        retrieval_service: RetrievalService,
        generator: BaseContentGenerator,
        diversity_analyzer: DiversityAnalyzer,
        ranker: VariantRanker,
        validator: BrandConsistencyValidator,
        theme_cache: Optional[ThemeAnalysisCache] = None,
        composer: Optional[PromptComposer] = None,
        max_concurrent: int = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.retrieval_service = retrieval_service
        self.generator = generator
        self.diversity_analyzer = diversity_analyzer
        self.ranker = ranker
        self.validator = validator
        self.logger = logger or logging.getLogger(__name__)
        self.theme_cache = theme_cache or ThemeAnalysisCache(logger=self.logger)
        self.composer = composer or PromptComposer(logger=self.logger)
        self.batch_processor = BatchProcessor(
            max_concurrent=max_concurrent or settings.scoring_max_concurrent,
            logger=self.logger,
        )

    def _parse_request(self, request: Union[GenerationRequest, Dict[str, Any]]) -> GenerationRequest:
        if isinstance(request, GenerationRequest):
            parsed = request
        else:
            try:
                parsed = GenerationRequest.model_validate(request)
            except ValidationError as e:
                raise InvalidPromptError(f"Invalid generation request: {e}")

        if not isinstance(parsed.prompt, str) or not parsed.prompt.strip():
            raise InvalidPromptError("Prompt must be a non-empty string")
        return parsed.model_copy(update={"prompt": parsed.prompt.strip()})

    def _variant_count(self, requested: Optional[int]) -> int:
        if requested is None:
            return settings.default_variant_count
        if requested > settings.max_variant_count:
            self.logger.warning(
                f"Requested {requested} variants; capping at {settings.max_variant_count}"
            )
            return settings.max_variant_count
        return requested

    async def _analyze_theme(self, theme: Theme) -> ThemeAnalysis:
        try:
            return self.theme_cache.get_or_compute(theme)
        except Exception as e:
            self.logger.warning(f"Theme analysis failed, using neutral analysis: {e}")
            return ThemeAnalysis.neutral()

    async def _retrieve(self, project: Project, prompt: str, theme: Theme) -> RetrievalContext:
        try:
            return await self.retrieval_service.retrieve_context(project.id, prompt, theme)
        except Exception as e:
            self.logger.error(f"Retrieval failed, continuing with theme only: {e}")
            return await self.retrieval_service.theme_only_context(theme)

    async def _generate(self, request: GenerationRequest, enhanced_prompt: str, count: int, audience: str) -> List[str]:
        prompt = enhanced_prompt
        style_preferences = dict(request.style_preferences)
        if request.media_type == "image":
            branded = self.composer.build_branded_prompt(
                enhanced_prompt, request.project, request.theme, audience, style_preferences
            )
            prompt = branded["prompt"]
            style_preferences["negative_prompt"] = branded["negative_prompt"]

        generation_prompt = self.composer.build_generation_prompt(
            prompt,
            request.project,
            request.theme,
            count,
            media_type=request.media_type,
            target_audience=audience,
            style_preferences=style_preferences,
        )

        try:
            raw_variants = await self.generator.generate(generation_prompt, count)
        except GenerationError:
            raise
        except Exception as e:
            self.logger.error(f"Error in generation: {e}")
            raise GenerationError(f"Generation failed: {e}")

        variants = [v.strip() for v in raw_variants if isinstance(v, str) and v.strip()][:count]
        if not variants:
            raise GenerationError(f"No variants generated ({count} requested)")
        return variants

    async def _score_quality(self, variants: List[str], request: GenerationRequest) -> List[int]:
        async def score(text: str) -> int:
            if request.media_type == "image":
                return score_image_prompt_quality(text, request.theme)
            return score_text_quality(text)

        outcomes = await self.batch_processor.process_batch(variants, score)
        return [outcome.value if outcome.ok else 0 for outcome in outcomes]

    def _analyze_variants(self, variants: List[str], theme: Theme) -> List[Optional[ContentAnalysis]]:
        analyses = []
        for index, text in enumerate(variants):
            try:
                analyses.append(analyze_content(text, theme))
            except Exception as e:
                self.logger.warning(f"Content analysis failed for variant {index}: {e}")
                analyses.append(None)
        return analyses

    async def _validate_top(self, variant: GeneratedVariant, request: GenerationRequest) -> Optional[ValidationResult]:
        try:
            return await self.validator.validate(
                variant.content, request.theme, request.project, quality_score=variant.quality_score
            )
        except Exception as e:
            self.logger.error(f"Brand validation failed: {e}")
            return None

    async def execute(self, request: Union[GenerationRequest, Dict[str, Any]]) -> PipelineResult:
        """
        Run the pipeline for one request.

        Args:
            request: GenerationRequest or a dict with prompt, theme, project and
                     optional variantCount / mediaType / targetAudience

        Returns:
            PipelineResult with variants best first and stage metadata

        Raises:
            InvalidPromptError: If the prompt is empty or not text
            GenerationError: If variants were requested and none were produced
        """
        started = time.perf_counter()
        request = self._parse_request(request)
        count = self._variant_count(request.variant_count)
        audience = request.target_audience or settings.default_target_audience
        stages: List[str] = []

        self.logger.info(f"Pipeline started: {count} {request.media_type} variants")

        analysis, context = await asyncio.gather(
            self._analyze_theme(request.theme),
            self._retrieve(request.project, request.prompt, request.theme),
        )
        stages.extend([STAGE_THEME_ANALYSIS, STAGE_RAG_RETRIEVAL])
        self.logger.info(
            f"Retrieval method {context.method}, {len(context.relevant_documents)} documents"
        )

        enhanced_prompt = self.composer.enhance(request.prompt, context, analysis)
        stages.append(STAGE_PROMPT_ENHANCEMENT)
        predicted_quality = self.composer.predict_quality(analysis, context, len(enhanced_prompt))
        stages.append(STAGE_QUALITY_PREDICTION)

        def build_result(variants: List[GeneratedVariant], diversity_report, validation=None) -> PipelineResult:
            average_quality = (
                round(sum(v.quality_score for v in variants) / len(variants)) if variants else 0
            )
            average_composite = (
                round(sum(v.composite_score or 0.0 for v in variants) / len(variants)) if variants else 0
            )
            metadata = PipelineMetadata(
                retrieval_context=context,
                diversity_report=diversity_report,
                pipeline_stages=stages,
                theme_analysis=analysis,
                enhanced_prompt=enhanced_prompt,
                predicted_quality=predicted_quality,
                prompt_quality=score_prompt_quality(request.prompt, request.theme.tags),
                average_quality=average_quality,
                average_composite_score=average_composite,
                rag_similarity=similarity_to_percent(context.average_similarity),
                rag_content_count=len(context.relevant_documents),
                validation=validation,
                media_type=request.media_type,
                target_audience=audience,
                generation_timestamp=datetime.now(timezone.utc),
                elapsed_ms=int((time.perf_counter() - started) * 1000),
            )
            self.logger.info(
                f"Pipeline finished: {len(variants)} variants, stages {', '.join(stages)}"
            )
            return PipelineResult(variants=variants, metadata=metadata)

        if count == 0:
            diversity_report = await self.diversity_analyzer.analyze([])
            stages.append(STAGE_DIVERSITY_ANALYSIS)
            return build_result([], diversity_report)

        texts = await self._generate(request, enhanced_prompt, count, audience)
        stages.append(STAGE_AI_GENERATION)

        quality_scores = await self._score_quality(texts, request)
        stages.append(STAGE_QUALITY_SCORING)

        analyses = self._analyze_variants(texts, request.theme)
        stages.append(STAGE_CONTENT_ANALYSIS)

        diversity_report = await self.diversity_analyzer.analyze(texts)
        stages.append(STAGE_DIVERSITY_ANALYSIS)
        if diversity_report.duplicate_pairs:
            self.logger.warning(f"Near-duplicate variants: {diversity_report.duplicate_pairs}")

        rankings = normalize_rankings(self.ranker.rank(texts, analyses, quality_scores), len(texts))
        variants = [
            GeneratedVariant(
                content=texts[ranking.index],
                quality_score=quality_scores[ranking.index],
                composite_score=ranking.composite_score,
                factors=ranking.factors,
                rank=position,
                original_index=ranking.index,
                analysis=analyses[ranking.index],
            )
            for position, ranking in enumerate(rankings, start=1)
        ]
        stages.append(STAGE_VARIANT_RANKING)

        validation = await self._validate_top(variants[0], request)
        stages.append(STAGE_BRAND_VALIDATION)

        return build_result(variants, diversity_report, validation)

    async def close(self):
        """Release provider connections"""
        await self.generator.close()
        await self.retrieval_service.embedding_service.close()
