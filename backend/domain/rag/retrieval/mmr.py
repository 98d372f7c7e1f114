"""
Maximal Marginal Relevance selection
"""

from typing import List, Sequence

from domain.rag.retrieval.similarity import cosine_similarity_matrix


def _normalize(values: Sequence[float]) -> List[float]:
    """Min-max scale to [0, 1]; constant input maps to 1.0"""
    low, high = min(values), max(values)
    if high == low:
        return [1.0] * len(values)
    return [(v - low) / (high - low) for v in values]


def mmr_select(
    relevance: Sequence[float],
    embeddings: Sequence[Sequence[float]],
    top_k: int,
    lambda_: float = 0.7,
) -> List[int]:
    """
    Greedy MMR over a candidate pool.

    The first pick is the most relevant candidate. Each later pick maximizes
    lambda * rel(d) - (1 - lambda) * max_{s in selected} cos(d, s).
    Relevance is min-max normalized first so it is on the same scale as
    cosine similarity (fused RRF scores are tiny otherwise).

    Args:
        relevance: Relevance per candidate
        embeddings: Embedding per candidate, same dimension
        top_k: Number of candidates to select
        lambda_: 1.0 = pure relevance, 0.0 = pure diversity

    Returns:
        Selected candidate indices in selection order; never repeats an
        index and never returns more than min(top_k, pool size)
    """
    if len(relevance) != len(embeddings):
        raise ValueError("relevance and embeddings must have the same length")
    if top_k < 0:
        raise ValueError(f"top_k must be >= 0, got {top_k}")
    if not 0.0 <= lambda_ <= 1.0:
        raise ValueError(f"lambda_ must be in [0, 1], got {lambda_}")

    n = len(relevance)
    if top_k == 0 or n == 0:
        return []

    by_relevance = sorted(range(n), key=lambda i: relevance[i], reverse=True)
    if top_k >= n:
        return by_relevance

    rel = _normalize(relevance)
    sims = cosine_similarity_matrix(embeddings)

    selected = [by_relevance[0]]
    remaining = [i for i in by_relevance if i != selected[0]]

    while len(selected) < top_k and remaining:
        best_idx, best_score = None, None
        for i in remaining:
            redundancy = max(sims[i][s] for s in selected)
            score = lambda_ * rel[i] - (1 - lambda_) * redundancy
            # strict > keeps the more relevant candidate on ties
            if best_score is None or score > best_score:
                best_idx, best_score = i, score
        selected.append(best_idx)
        remaining.remove(best_idx)

    return selected
