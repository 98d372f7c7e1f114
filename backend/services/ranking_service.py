"""
Ranking service - validate several content items and rank them by overall score
"""

import logging
from typing import List, Optional
from domain.brand.types import Project, Theme
from domain.evaluation.brand_validator import BrandConsistencyValidator
from domain.evaluation.types import RankedContent, RankingReport, RankingSummary
from domain.rag.embedding.batch_processor import BatchProcessor
from domain.rag.retrieval.types import Document
from services.base import BaseService
from core.config import settings

logger = logging.getLogger(__name__)


def recommendation_for(overall: int, brand: int) -> str:
    if overall >= 85:
        return "Excellent - Best option with strong brand alignment and high quality"
    if overall >= 70:
        return "Good - Solid option that aligns well with brand guidelines"
    if overall >= 50:
        if brand < 60:
            return "Acceptable - Quality is good but brand alignment could be improved"
        return "Acceptable - Brand alignment is good but quality could be improved"
    return "Needs improvement - Consider regenerating or refining this content"


class RankingService(BaseService):
    """Scores content items concurrently and returns them best first"""

    def __init__(self, validator: BrandConsistencyValidator, max_concurrent: int = None):
        self.validator = validator
        self.batch_processor = BatchProcessor(
            max_concurrent=max_concurrent or settings.scoring_max_concurrent,
            logger=logger,
        )

    async def score_and_rank(
        self,
        contents: List[Document],
        theme: Theme,
        project: Optional[Project] = None,
    ) -> RankingReport:
        """
        Validate every item and rank by overall score.

        A failing item is kept with zero scores so the output has one entry
        per input. Ties keep input order.
        """
        outcomes = await self.batch_processor.process_batch(
            contents, lambda doc: self.validator.validate(doc.text, theme, project)
        )

        scored = []
        for document, outcome in zip(contents, outcomes):
            if outcome.ok:
                result = outcome.value
                scored.append(RankedContent(
                    content_id=document.id,
                    overall_score=result.overall_score,
                    brand_consistency_score=result.brand_consistency_score,
                    quality_score=result.quality_score,
                    passes=result.passes,
                    recommendation=recommendation_for(
                        result.overall_score, result.brand_consistency_score
                    ),
                ))
            else:
                logger.error(f"Failed to score content {document.id}: {outcome.error}")
                scored.append(RankedContent(
                    content_id=document.id,
                    recommendation="Unable to score content",
                    error=str(outcome.error),
                ))

        scored.sort(key=lambda item: item.overall_score, reverse=True)
        ranked = [item.model_copy(update={"rank": i}) for i, item in enumerate(scored, start=1)]

        total = len(ranked)
        summary = RankingSummary(
            total_ranked=total,
            top_score=ranked[0].overall_score if ranked else 0,
            average_score=int(round(sum(item.overall_score for item in ranked) / total)) if total else 0,
        )
        logger.info(f"Ranked {total} content items (top score {summary.top_score})")
        return RankingReport(ranked=ranked, summary=summary)
