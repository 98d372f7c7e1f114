"""
Reciprocal Rank Fusion
"""

from typing import Dict, List, Optional, Sequence, Tuple


def reciprocal_rank_fusion(
    rankings: Sequence[Sequence[str]],
    k: int = 60,
    candidate_order: Optional[Sequence[str]] = None,
) -> List[Tuple[str, float]]:
    """
    Fuse several rankings of the same candidate set.

    fused(d) = sum over rankings containing d of 1 / (k + rank(d)), rank 1-based.
    A ranking that omits d adds nothing for it.

    Args:
        rankings: Ranked id lists, best first. Repeated ids within one list
                  only count at their first position.
        k: Damping constant; larger k flattens the gap between top ranks
        candidate_order: Tie-break order. Defaults to first appearance across
                         the rankings. Ids listed here but absent from every
                         ranking are included with score 0.

    Returns:
        (id, fused_score) pairs, best first, ties in candidate order
    """
    if k < 0:
        raise ValueError(f"k must be >= 0, got {k}")

    scores: Dict[str, float] = {}
    if candidate_order is not None:
        for doc_id in candidate_order:
            scores.setdefault(doc_id, 0.0)

    for ranking in rankings:
        seen = set()
        for rank, doc_id in enumerate(ranking, start=1):
            if doc_id in seen:
                continue
            seen.add(doc_id)
            scores[doc_id] = scores.get(doc_id, 0.0) + 1.0 / (k + rank)

    # Dict keeps insertion order and sort is stable
    return sorted(scores.items(), key=lambda item: item[1], reverse=True)
