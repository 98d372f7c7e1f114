"""
Prompt composition: retrieval-enhanced prompts, predicted quality, generation instructions
"""

import json
import logging
from typing import Any, Dict, List, Optional

from domain.brand.types import Project, Theme, ThemeAnalysis
from domain.evaluation.lexicons import NEGATIVE_PROMPT_KEYWORDS
from domain.generation.parser import VARIANT_END, VARIANT_START
from domain.rag.retrieval.types import RetrievalContext


def join_natural(items: List[str]) -> str:
    """'a', 'a and b', 'a, b and c'"""
    if len(items) <= 1:
        return "".join(items)
    return f"{', '.join(items[:-1])} and {items[-1]}"


class PromptComposer:
    """Builds prompts from the user's request, retrieval context and theme analysis"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def enhance(self, prompt: str, context: RetrievalContext, analysis: ThemeAnalysis) -> str:
        """
        Append style cues to the user's prompt.

        Up to two prior documents (over 20 chars, truncated to 200) are cited as
        examples; without documents, up to two similar summaries (over 10 chars,
        truncated to 150) are used instead. Palette, mood and dominant styles follow.
        """
        enhancements = []

        if context.relevant_documents:
            examples = [doc.text for doc in context.relevant_documents[:2]]
            examples = [text[:200] for text in examples if len(text) > 20]
            if examples:
                quoted = '" and "'.join(examples)
                enhancements.append(f'matching the style of previous successful content: "{quoted}"')
        elif context.similar_summaries:
            summaries = [s[:150] for s in context.similar_summaries[:2]]
            summaries = [s for s in summaries if len(s) > 10]
            if summaries:
                quoted = '" and "'.join(summaries)
                enhancements.append(f'drawing inspiration from previous brand prompts: "{quoted}"')

        palette = analysis.color_palette
        color_parts = []
        if palette.primary:
            color_parts.append(" and ".join(palette.primary))
        if palette.secondary:
            color_parts.append(" and ".join(palette.secondary))
        if palette.accent:
            color_parts.append(f"{' and '.join(palette.accent)} accents")
        if color_parts:
            enhancements.append(f"featuring {', '.join(color_parts)}")

        enhancements.append(f"with a {analysis.visual_mood} atmosphere")

        styles = [s for s in analysis.dominant_styles if s]
        if styles:
            enhancements.append(f"in {join_natural(styles)} style")

        enhanced = ", ".join(part for part in [prompt, *enhancements] if part)
        self.logger.info(f"Prompt enhanced: {len(prompt)} -> {len(enhanced)} chars")
        return enhanced

    def predict_quality(self, analysis: ThemeAnalysis, context: RetrievalContext, prompt_length: int) -> int:
        """
        Expected generation quality (0-100) before generating.

        50 + 0.2 * brand strength, +15 / +10 / +5 for average similarity above
        0.7 / 0.5 / 0.3, +10 when the prompt is roughly 20-80 words
        (chars / 5), +5 for complexity above 70.
        """
        score = 50 + analysis.brand_strength * 0.2

        similarity = context.average_similarity
        if similarity > 0.7:
            score += 15
        elif similarity > 0.5:
            score += 10
        elif similarity > 0.3:
            score += 5

        if 20 <= round(max(0, prompt_length) / 5) <= 80:
            score += 10
        if analysis.complexity_score > 70:
            score += 5

        return int(max(0, min(100, round(score))))

    def build_branded_prompt(
        self,
        prompt: str,
        project: Project,
        theme: Theme,
        target_audience: str = "general",
        style_preferences: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, str]:
        """
        Branded image prompt plus a negative prompt.

        Returns:
            {"prompt": ..., "negative_prompt": ...}
        """
        style_preferences = style_preferences or {}
        parts = [
            prompt,
            f"inspired by {' and '.join(theme.inspirations[:2])}" if theme.inspirations else "",
            f"for {project.name}: {project.description or ''}".rstrip(": "),
            f"designed for {target_audience} audience",
            "high quality, professional, marketing-ready, detailed",
            f"{style_preferences['composition']} composition" if style_preferences.get("composition") else "",
            f"{style_preferences['lighting']} lighting" if style_preferences.get("lighting") else "",
        ]
        negative = [*NEGATIVE_PROMPT_KEYWORDS, style_preferences.get("avoid") or ""]

        return {
            "prompt": ", ".join(p for p in parts if p),
            "negative_prompt": ", ".join(n for n in negative if n),
        }

    def build_generation_prompt(
        self,
        prompt: str,
        project: Project,
        theme: Theme,
        variant_count: int,
        media_type: str = "text",
        target_audience: str = "general",
        style_preferences: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Instructions asking the generator for marker-delimited variants"""
        return "\n".join([
            f"Generate {variant_count} different variants of {media_type} content for a marketing campaign.",
            "",
            "PROJECT CONTEXT:",
            f"- Project Name: {project.name}",
            f"- Description: {project.description or ''}",
            f"- Goals: {project.goals or ''}",
            f"- Customer Type: {project.customer_type or ''}",
            "",
            "THEME & BRAND:",
            f"- Theme Name: {theme.name}",
            f"- Tags: {', '.join(theme.tags)}",
            f"- Inspirations: {', '.join(theme.inspirations)}",
            "",
            "GENERATION REQUIREMENTS:",
            f"- Prompt: {prompt}",
            f"- Media Type: {media_type}",
            f"- Target Audience: {target_audience}",
            f"- Style Preferences: {json.dumps(style_preferences or {}, sort_keys=True)}",
            "",
            f"Create {variant_count} distinct, branded variants that align with the project's theme and goals.",
            f'Wrap each variant in "{VARIANT_START}" and "{VARIANT_END}" markers.',
        ])
