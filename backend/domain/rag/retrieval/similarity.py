"""
Similarity functions (cosine, pairwise cosine, Jaccard)
"""

import numpy as np
from typing import List, Sequence, Set


def cosine_similarity(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    """
    Compute cosine similarity between two raw (unnormalized) vectors.

    Returns 0.0 for empty, zero-norm or mismatched-length vectors; the
    result is clamped to [-1, 1] against floating point drift.
    """
    if vec1 is None or vec2 is None or len(vec1) == 0 or len(vec1) != len(vec2):
        return 0.0

    vec1_np = np.asarray(vec1, dtype=np.float64)
    vec2_np = np.asarray(vec2, dtype=np.float64)

    norm1 = np.linalg.norm(vec1_np)
    norm2 = np.linalg.norm(vec2_np)

    if norm1 == 0 or norm2 == 0:
        return 0.0

    similarity = float(np.dot(vec1_np, vec2_np) / (norm1 * norm2))
    return max(-1.0, min(1.0, similarity))


def cosine_similarity_matrix(vectors: Sequence[Sequence[float]]) -> np.ndarray:
    """
    Pairwise cosine similarities for equal-length vectors (vectorized).

    Zero vectors get similarity 0 with everything, including themselves.

    Args:
        vectors: N vectors of dimension d

    Returns:
        [N, N] array clamped to [-1, 1]
    """
    if len(vectors) == 0:
        return np.zeros((0, 0))

    arr = np.asarray(vectors, dtype=np.float64)  # Shape: [N, d]
    norms = np.linalg.norm(arr, axis=1, keepdims=True)
    safe_norms = np.where(norms == 0, 1.0, norms)
    unit = arr / safe_norms
    unit[norms[:, 0] == 0] = 0.0

    matrix = np.matmul(unit, unit.T)
    return np.clip(matrix, -1.0, 1.0)


def jaccard_similarity(set_a: Set[str], set_b: Set[str]) -> float:
    """|A ∩ B| / |A ∪ B|; 0.0 when both sets are empty"""
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def similarity_to_percent(similarity: float) -> int:
    """Map a cosine similarity to an integer percentage in [0, 100]"""
    return int(round(max(0.0, min(1.0, similarity)) * 100))
