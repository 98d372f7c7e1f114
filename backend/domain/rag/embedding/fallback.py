"""
Deterministic local embeddings used when the provider is unavailable
"""

import re
import string
from typing import List

import numpy as np

_WORD_RE = re.compile(r"\w+")

# Reserved slots for text statistics
_STAT_SLOTS = 3


def string_hash(value: str) -> int:
    """
    Stable 32-bit polynomial string hash (h * 31 + c), returned as a non-negative int.

    Python's builtin hash() is salted per process, so it cannot be used for
    vectors that must be identical across runs.
    """
    h = 0
    for char in value:
        h = (h * 31 + ord(char)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


class DeterministicEmbedder:
    """Hash-based embedding over word, trigram and text-statistic features"""

    def __init__(self, dimensions: int = 768):
        if dimensions <= _STAT_SLOTS:
            raise ValueError(f"dimensions must be greater than {_STAT_SLOTS}, got {dimensions}")
        self.dimensions = dimensions

    def _bucket(self, feature: str) -> int:
        # Statistic slots are kept clear of hashed features
        return _STAT_SLOTS + string_hash(feature) % (self.dimensions - _STAT_SLOTS)

    def embed(self, text: str) -> List[float]:
        """
        Embed text deterministically.

        Features:
        - word hashes, weighted 1/(position+1) so leading words dominate
        - character trigram hashes, 0.5 each
        - slot 0: word count / 100, slot 1: average word length / 10,
          slot 2: punctuation ratio

        Returns:
            L2-normalized vector of length `dimensions`. Empty text maps to a
            fixed unit vector so the result is never all zeros.
        """
        vector = np.zeros(self.dimensions, dtype=np.float64)
        lowered = (text or "").lower()
        words = _WORD_RE.findall(lowered)

        for idx, word in enumerate(words):
            vector[self._bucket(word)] += 1.0 / (idx + 1)

        for i in range(len(lowered) - 2):
            vector[self._bucket(lowered[i:i + 3])] += 0.5

        if words:
            vector[0] = len(words) / 100.0
            vector[1] = sum(len(w) for w in words) / len(words) / 10.0
        if lowered:
            punctuation = sum(1 for c in lowered if c in string.punctuation)
            vector[2] = punctuation / len(lowered)

        norm = np.linalg.norm(vector)
        if norm == 0:
            vector[self._bucket("")] = 1.0
            return vector.tolist()

        return (vector / norm).tolist()
