"""
Unit tests for tokenization and BM25 lexical scoring
"""

import math

import pytest

from domain.rag.retrieval.bm25 import BM25Scorer
from domain.rag.retrieval.tokenizer import tokenize
from domain.rag.retrieval.types import BM25Config, Document


def docs(*texts):
    return [Document(id=f"d{i}", text=t) for i, t in enumerate(texts)]


# ---------------------------------------------------------------------------
# TOKENIZER
# ---------------------------------------------------------------------------


class TestTokenize:

    def test_lowercases_and_strips_punctuation(self):
        assert tokenize("GPU-Training, on Kubernetes!") == ["gpu", "training", "kubernetes"]

    def test_drops_stop_words_and_single_characters(self):
        assert tokenize("a guide to the x factor") == ["guide", "factor"]

    def test_empty_text(self):
        assert tokenize("") == []
        assert tokenize(None) == []


# ---------------------------------------------------------------------------
# SCORING
# ---------------------------------------------------------------------------


class TestBM25Score:

    def test_empty_corpus_returns_empty(self):
        assert BM25Scorer().score("gpu training", []) == []

    def test_no_matching_terms_scores_zero(self):
        scores = BM25Scorer().score("seaweed", ["gpu training " * 50, "kubernetes"])
        assert scores == [0.0, 0.0]

    def test_query_without_usable_terms_scores_zero(self):
        assert BM25Scorer().score("the and of", ["the cat", "and dog"]) == [0.0, 0.0]

    def test_single_term_matches_formula(self):
        config = BM25Config(k1=1.5, b=0.75)
        texts = ["gpu cluster", "coffee beans roast"]
        scores = BM25Scorer(config).score("gpu", texts)

        # df=1, N=2; doc length 2, avg length 2.5
        idf = math.log((2 - 1 + 0.5) / (1 + 0.5) + 1)
        denom = 1 + 1.5 * (1 - 0.75 + 0.75 * 2 / 2.5)
        assert scores[0] == pytest.approx(idf * 2.5 / denom)
        assert scores[1] == 0.0

    def test_repeated_query_terms_count_once(self):
        scorer = BM25Scorer()
        texts = ["gpu cluster", "coffee"]
        assert scorer.score("gpu gpu gpu", texts) == scorer.score("gpu", texts)

    def test_shorter_document_scores_higher_for_same_tf(self):
        scores = BM25Scorer().score("gpu", ["gpu", "gpu cluster scheduling platform tooling"])
        assert scores[0] > scores[1]

    def test_scores_are_non_negative(self):
        scores = BM25Scorer().score("gpu", ["gpu", "gpu", "gpu"])
        assert all(s > 0 for s in scores)


# ---------------------------------------------------------------------------
# RANKING
# ---------------------------------------------------------------------------


class TestBM25Rank:

    def test_best_match_first(self):
        corpus = docs("espresso roast", "gpu training on kubernetes", "gpu")
        ranked = BM25Scorer().rank("kubernetes gpu training", corpus)
        assert ranked[0].document.id == "d1"
        assert ranked[-1].document.id == "d0"

    def test_all_zero_keeps_corpus_order(self):
        corpus = docs("alpha words", "beta words", "gamma words")
        ranked = BM25Scorer().rank("seaweed", corpus)
        assert [r.document.id for r in ranked] == ["d0", "d1", "d2"]
        assert all(r.score == 0.0 for r in ranked)

    def test_empty_corpus(self):
        assert BM25Scorer().rank("gpu", []) == []
