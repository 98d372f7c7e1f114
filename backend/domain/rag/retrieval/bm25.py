"""
BM25 lexical scoring over a small per-request corpus
"""

import math
from collections import Counter
from typing import Callable, List, Optional

from domain.rag.retrieval.tokenizer import tokenize
from domain.rag.retrieval.types import BM25Config, Document, ScoredDocument


class BM25Scorer:
    """Okapi BM25 with document-length normalization"""

    def __init__(
        self,
        config: Optional[BM25Config] = None,
        tokenizer: Callable[[str], List[str]] = tokenize,
    ):
        self.config = config or BM25Config()
        self.tokenizer = tokenizer

    def score(self, query: str, texts: List[str]) -> List[float]:
        """
        Score each text against the query.

        idf = ln((N - df + 0.5) / (df + 0.5) + 1), always positive.
        A text sharing no term with the query scores exactly 0.

        Args:
            query: Query text
            texts: Corpus texts

        Returns:
            One score per text, in input order
        """
        if not texts:
            return []

        # Repeated query terms count once
        query_terms = list(dict.fromkeys(self.tokenizer(query)))
        if not query_terms:
            return [0.0] * len(texts)

        doc_tokens = [self.tokenizer(text) for text in texts]
        doc_lengths = [len(tokens) for tokens in doc_tokens]
        avg_length = sum(doc_lengths) / len(doc_lengths) or 1.0

        n_docs = len(texts)
        doc_freq = Counter()
        for tokens in doc_tokens:
            doc_freq.update(set(tokens))

        idf = {
            term: math.log((n_docs - doc_freq[term] + 0.5) / (doc_freq[term] + 0.5) + 1.0)
            for term in query_terms
        }

        k1, b = self.config.k1, self.config.b
        scores = []
        for tokens, length in zip(doc_tokens, doc_lengths):
            tf = Counter(tokens)
            score = 0.0
            for term in query_terms:
                freq = tf.get(term, 0)
                if freq == 0:
                    continue
                denom = freq + k1 * (1 - b + b * length / avg_length)
                score += idf[term] * freq * (k1 + 1) / denom
            scores.append(score)
        return scores

    def rank(self, query: str, documents: List[Document]) -> List[ScoredDocument]:
        """
        Rank documents by BM25 score, best first.

        Sorting is stable, so equal scores (including all-zero) keep corpus order.
        """
        scores = self.score(query, [doc.text for doc in documents])
        ranked = [ScoredDocument(document=doc, score=s) for doc, s in zip(documents, scores)]
        ranked.sort(key=lambda x: x.score, reverse=True)
        return ranked
