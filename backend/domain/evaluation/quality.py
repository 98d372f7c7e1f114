"""
Heuristic quality scores: generated text, image prompts, user prompts
"""

import re
from typing import List, Optional

from domain.brand.types import Theme
from domain.evaluation.lexicons import (
    COMPOSITION_KEYWORDS,
    DEGRADING_PHRASES,
    IMAGE_COLOR_KEYWORDS,
    IMAGE_STYLE_KEYWORDS,
    PROFESSIONAL_WORDS,
    QUALITY_KEYWORDS,
)

TEXT_BASELINE = 70
EMPTY_TEXT_SCORE = 60
IMAGE_BASELINE = 60
PROMPT_BASELINE = 50

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def _clamp(score: float) -> int:
    return int(max(0, min(100, round(score))))


def _require_text(text, name: str = "text") -> str:
    if not isinstance(text, str):
        raise TypeError(f"{name} must be a string, got {type(text).__name__}")
    return text


def score_text_quality(text: str) -> int:
    """
    Score generated text from a baseline of 70.

    Adjustments:
    - +10 for 20-200 words, -10 for <10 or >300 words
    - +5 for two or more sentences
    - +5 for average word length 5-8
    - -10 for more than three '!'
    - -10 when more than 10% of words are all-caps (length > 2)
    - +3 per professional vocabulary hit, at most +10

    Args:
        text: Generated content

    Returns:
        Score in [0, 100]; blank text scores 60
    """
    _require_text(text)
    if not text.strip():
        return EMPTY_TEXT_SCORE

    score = TEXT_BASELINE
    words = text.split()
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]

    if 20 <= len(words) <= 200:
        score += 10
    elif len(words) < 10 or len(words) > 300:
        score -= 10

    if len(sentences) >= 2:
        score += 5

    avg_word_length = sum(len(w) for w in words) / len(words)
    if 5 <= avg_word_length <= 8:
        score += 5

    if text.count("!") > 3:
        score -= 10

    caps_words = [w for w in words if len(w) > 2 and w.isupper()]
    if len(caps_words) > len(words) * 0.1:
        score -= 10

    lowered = text.lower()
    professional_hits = sum(1 for word in PROFESSIONAL_WORDS if word in lowered)
    score += min(professional_hits * 3, 10)

    return _clamp(score)


def score_image_prompt_quality(prompt: str, theme: Optional[Theme] = None) -> int:
    """
    Score an image-generation prompt from a baseline of 60.

    Rewards a 10-50 word prompt, theme tag and inspiration mentions, and
    quality / style / color / composition vocabulary; penalizes very short or
    very long prompts and degrading phrases ("low quality", "blurry").
    """
    _require_text(prompt, "prompt")
    theme = theme or Theme()
    lowered = prompt.lower()
    words = prompt.split()
    score = IMAGE_BASELINE

    if 10 <= len(words) <= 50:
        score += 15
    elif len(words) < 5:
        score -= 15
    elif len(words) > 100:
        score -= 10

    tag_hits = sum(1 for tag in theme.tags if tag and tag.lower() in lowered)
    score += min(tag_hits * 5, 20)

    score += min(sum(1 for k in QUALITY_KEYWORDS if k in lowered) * 4, 12)
    score += min(sum(1 for k in IMAGE_STYLE_KEYWORDS if k in lowered) * 3, 10)

    if any(k in lowered for k in IMAGE_COLOR_KEYWORDS):
        score += 8
    if any(k in lowered for k in COMPOSITION_KEYWORDS):
        score += 5
    if any(p in lowered for p in DEGRADING_PHRASES):
        score -= 20

    inspiration_hits = sum(1 for insp in theme.inspirations if insp and insp.lower() in lowered)
    score += min(inspiration_hits * 6, 15)

    return _clamp(score)


def score_prompt_quality(prompt: str, tags: Optional[List[str]] = None) -> int:
    """
    Score a user prompt before generation.

    Prompts of 20-100 words that mention the brand's tags score highest;
    fewer than 10 or more than 150 words score below 50.
    """
    _require_text(prompt, "prompt")
    lowered = prompt.lower()
    word_count = len(prompt.split())
    score = PROMPT_BASELINE

    if word_count < 10 or word_count > 150:
        score -= 30
    elif 20 <= word_count <= 100:
        score += 15
    elif word_count > 100:
        score += 5

    tag_hits = sum(1 for tag in (tags or []) if tag and tag.lower() in lowered)
    score += min(tag_hits * 5, 20)

    if any(k in lowered for k in QUALITY_KEYWORDS):
        score += 5

    return _clamp(score)
