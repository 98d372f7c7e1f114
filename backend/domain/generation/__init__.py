"""
Content generation: prompts, variant parsing, generators
"""

from domain.generation.generator import BaseContentGenerator, LLMContentGenerator
from domain.generation.parser import parse_variants, VARIANT_START, VARIANT_END
from domain.generation.prompt import PromptComposer
from domain.generation.types import GenerationRequest, GeneratedVariant, PipelineMetadata, PipelineResult, PIPELINE_STAGES

__all__ = [
    "BaseContentGenerator",
    "LLMContentGenerator",
    "parse_variants",
    "VARIANT_START",
    "VARIANT_END",
    "PromptComposer",
    "GenerationRequest",
    "GeneratedVariant",
    "PipelineMetadata",
    "PipelineResult",
    "PIPELINE_STAGES",
]
