"""
Marketing-oriented content analysis: reading ease, marketing readability, tone, keywords, sentiment, structure
"""

import re
from collections import Counter
from typing import Any, List, Sequence, Union

from pydantic import ValidationError

from core.exceptions import EvaluationError
from domain.brand.types import Theme
from domain.evaluation.lexicons import (
    BENEFIT_PHRASES,
    CTA_PATTERNS,
    EMOTIONAL_PHRASES,
    NEGATIVE_WORDS,
    POSITIVE_WORDS,
    POWER_WORDS,
    SOCIAL_PROOF_PHRASES,
    URGENCY_PHRASES,
)
from domain.evaluation.types import (
    ContentAnalysis,
    KeywordCount,
    KeywordDensity,
    MarketingReadability,
    MarketingTone,
    Readability,
    Sentiment,
    Structure,
)
from domain.rag.retrieval.tokenizer import STOP_WORDS

_WORD_RE = re.compile(r"\b[a-zA-Z]+\b")
_SENTENCE_END_RE = re.compile(r"[.!?]+")
_PARAGRAPH_RE = re.compile(r"\n\s*\n")
_CTA_RE = re.compile(r"\b(?:" + "|".join(CTA_PATTERNS) + r")\b")
_SILENT_E_RE = re.compile(r"[^laeiouy]e$")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")

# Scannability is best for 8-20 words per sentence
_IDEAL_SENTENCE_MIN = 8
_IDEAL_SENTENCE_MAX = 20


def _require_text(text: Any) -> str:
    if not isinstance(text, str):
        raise TypeError(f"text must be a string, got {type(text).__name__}")
    return text


def get_words(text: str) -> List[str]:
    return _WORD_RE.findall(text)


def count_sentences(text: str) -> int:
    """Number of [.!?]+ runs; text without terminators counts as one sentence"""
    return len(_SENTENCE_END_RE.findall(text)) or 1


def _count_phrases(lowered: str, phrases: Sequence[str]) -> int:
    return sum(len(re.findall(rf"\b{re.escape(p)}\b", lowered)) for p in phrases)


def _level(score: int, strong: int, moderate: int) -> str:
    if score >= strong:
        return "strong"
    if score >= moderate:
        return "moderate"
    return "weak"


def scannability_score(avg_sentence_length: float) -> int:
    """100 inside the ideal band, falling off for choppy or run-on sentences"""
    if avg_sentence_length < _IDEAL_SENTENCE_MIN:
        score = 100 - (_IDEAL_SENTENCE_MIN - avg_sentence_length) * 5
    elif avg_sentence_length > _IDEAL_SENTENCE_MAX:
        score = 100 - (avg_sentence_length - _IDEAL_SENTENCE_MAX) * 4
    else:
        score = 100
    return int(max(0, min(100, round(score))))


def count_syllables(word: str) -> int:
    """Vowel-group heuristic; a trailing silent e and a leading y do not count"""
    word = word.lower()
    if len(word) <= 3:
        return 1
    word = _SILENT_E_RE.sub("", word)
    if word.startswith("y"):
        word = word[1:]
    return len(_VOWEL_GROUP_RE.findall(word)) or 1


def calculate_readability(text: str) -> Readability:
    """
    Flesch reading ease and Flesch-Kincaid grade level.

    ease  = 206.835 - 1.015 * words/sentence - 84.6 * syllables/word
    grade = 0.39 * words/sentence + 11.8 * syllables/word - 15.59

    Ease is rounded and clamped to 0-100, grade is kept to one decimal and
    never negative. Levels: easy >= 70, moderate >= 50, else difficult.
    Text without words is "unknown".
    """
    _require_text(text)
    words = get_words(text)
    if not words:
        return Readability()

    words_per_sentence = len(words) / count_sentences(text)
    syllables_per_word = sum(count_syllables(w) for w in words) / len(words)

    ease = 206.835 - 1.015 * words_per_sentence - 84.6 * syllables_per_word
    grade = 0.39 * words_per_sentence + 11.8 * syllables_per_word - 15.59
    score = int(max(0, min(100, round(ease))))

    if score >= 70:
        level = "easy"
    elif score >= 50:
        level = "moderate"
    else:
        level = "difficult"

    return Readability(score=score, grade_level=max(0.0, round(grade * 10) / 10), level=level)


def analyze_marketing_readability(text: str) -> MarketingReadability:
    """
    Readability for marketing copy.

    score = min(power words * 10, 40) + 25 if a call to action is present
            + 0.35 * scannability

    Levels: strong >= 65, moderate >= 40, else weak. Text without words
    scores 0 ("weak").
    """
    _require_text(text)
    words = get_words(text)
    if not words:
        return MarketingReadability()

    lowered = text.lower()
    power_word_count = sum(1 for w in words if w.lower() in POWER_WORDS)
    has_cta = bool(_CTA_RE.search(lowered))
    scannability = scannability_score(len(words) / count_sentences(text))

    score = min(power_word_count * 10, 40) + (25 if has_cta else 0) + scannability * 0.35
    score = int(max(0, min(100, round(score))))

    return MarketingReadability(
        score=score,
        power_word_count=power_word_count,
        has_cta=has_cta,
        scannability_score=scannability,
        level=_level(score, strong=65, moderate=40),
    )


def analyze_marketing_tone(text: str) -> MarketingTone:
    """
    Persuasion signals, each 25 points per phrase hit capped at 100.

    overall = 0.3 * urgency + 0.3 * benefit + 0.2 * social proof + 0.2 * emotion
    Labels: strong >= 50, moderate >= 25, else weak.
    """
    _require_text(text)
    if not text.strip():
        return MarketingTone()

    lowered = text.lower()

    def signal(phrases: Sequence[str]) -> int:
        return min(_count_phrases(lowered, phrases) * 25, 100)

    urgency = signal(URGENCY_PHRASES)
    benefit = signal(BENEFIT_PHRASES)
    social_proof = signal(SOCIAL_PROOF_PHRASES)
    emotional = signal(EMOTIONAL_PHRASES)
    overall = int(round(0.3 * urgency + 0.3 * benefit + 0.2 * social_proof + 0.2 * emotional))

    return MarketingTone(
        urgency_score=urgency,
        benefit_score=benefit,
        social_proof_score=social_proof,
        emotional_appeal=emotional,
        overall_persuasion=overall,
        label=_level(overall, strong=50, moderate=25),
    )


def _coerce_theme(theme: Union[Theme, dict]) -> Theme:
    if isinstance(theme, Theme):
        return theme
    if not isinstance(theme, dict):
        raise EvaluationError(f"theme must be a Theme or dict, got {type(theme).__name__}")
    try:
        return Theme.model_validate(theme)
    except ValidationError as e:
        raise EvaluationError(f"Malformed theme: {e}")


def brand_keywords(theme: Theme) -> List[str]:
    """Lowercased tags, inspirations and name words longer than two characters"""
    candidates = [*theme.tags, *theme.inspirations, *theme.name.split()]
    keywords = [k.lower().strip() for k in candidates]
    return list(dict.fromkeys(k for k in keywords if len(k) > 2))


def analyze_keyword_density(text: str, theme: Union[Theme, dict]) -> KeywordDensity:
    """
    Brand keyword usage and most frequent non-stop-words.

    Raises:
        TypeError: If text is not a string
        EvaluationError: If theme is malformed
    """
    _require_text(text)
    theme = _coerce_theme(theme)

    words = get_words(text)
    lowered = text.lower()

    brand_count = _count_phrases(lowered, brand_keywords(theme))
    percentage = (brand_count / len(words) * 100) if words else 0.0

    freq = Counter(w.lower() for w in words if w.lower() not in STOP_WORDS)
    top_keywords = [KeywordCount(word=w, count=c) for w, c in freq.most_common(5)]

    return KeywordDensity(
        brand_keyword_count=brand_count,
        brand_keyword_percentage=round(percentage, 2),
        top_keywords=top_keywords,
    )


def analyze_sentiment(text: str) -> Sentiment:
    """Lexicon sentiment: (positive - negative) / sentiment words"""
    _require_text(text)
    words = [w.lower() for w in get_words(text)]
    positive = sum(1 for w in words if w in POSITIVE_WORDS)
    negative = sum(1 for w in words if w in NEGATIVE_WORDS)
    total = positive + negative

    score = (positive - negative) / total if total else 0.0
    if score > 0.2:
        label = "positive"
    elif score < -0.2:
        label = "negative"
    else:
        label = "neutral"
    confidence = min(1.0, total / len(words) * 5) if words else 0.0

    return Sentiment(score=round(score, 2), label=label, confidence=round(confidence, 2))


def analyze_structure(text: str) -> Structure:
    """Sentence, word and paragraph counts"""
    _require_text(text)
    sentences = count_sentences(text)
    word_count = len(get_words(text))
    paragraphs = [p for p in _PARAGRAPH_RE.split(text) if p.strip()]

    return Structure(
        sentence_count=sentences,
        word_count=word_count,
        avg_sentence_length=round(word_count / sentences) if sentences else 0,
        paragraph_count=len(paragraphs),
    )


def analyze_content(text: str, theme: Union[Theme, dict]) -> ContentAnalysis:
    """Run every analysis on one piece of content"""
    return ContentAnalysis(
        readability=analyze_marketing_readability(text),
        reading_ease=calculate_readability(text),
        tone=analyze_marketing_tone(text),
        keyword_density=analyze_keyword_density(text, theme),
        sentiment=analyze_sentiment(text),
        structure=analyze_structure(text),
    )
