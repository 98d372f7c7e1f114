"""
Text tokenization shared by lexical scoring and content analysis
"""

import re
from typing import List

_TOKEN_RE = re.compile(r"[^\w\s]|_")

STOP_WORDS = frozenset([
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
    "be", "have", "has", "had", "do", "does", "did", "will", "would",
    "could", "should", "may", "might", "must", "shall", "can", "this",
    "that", "these", "those", "i", "you", "he", "she", "it", "we", "they",
    "what", "which", "who", "whom", "whose", "where", "when", "why", "how",
    "all", "each", "every", "both", "few", "more", "most", "other", "some",
    "such", "no", "nor", "not", "only", "own", "same", "so", "than", "too",
    "very", "just", "also", "now", "here", "there", "then", "once", "your",
    "our", "their", "its", "my", "his", "her",
])


def tokenize(text: str) -> List[str]:
    """
    Lowercase, strip punctuation, drop stop words and single-character tokens.

    Args:
        text: Raw text

    Returns:
        Tokens in original order (duplicates kept)
    """
    if not text:
        return []
    cleaned = _TOKEN_RE.sub(" ", text.lower())
    return [t for t in cleaned.split() if len(t) > 1 and t not in STOP_WORDS]
