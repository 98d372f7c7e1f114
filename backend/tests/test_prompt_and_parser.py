"""
Tests for prompt composition and variant parsing
"""

import pytest

from domain.brand.types import ColorPalette, Project, Theme, ThemeAnalysis
from domain.generation.parser import VARIANT_END, VARIANT_START, parse_variants
from domain.generation.prompt import PromptComposer, join_natural
from domain.rag.retrieval.types import Document, RetrievalContext


def wrap(text: str) -> str:
    return f"{VARIANT_START}\n{text}\n{VARIANT_END}"


@pytest.fixture
def composer():
    return PromptComposer()


@pytest.fixture
def analysis():
    return ThemeAnalysis(
        color_palette=ColorPalette(primary=["blue"], accent=["gold"]),
        visual_mood="calm",
        dominant_styles=["modern", "bold"],
        complexity_score=90,
        brand_strength=90,
    )


# ---------------------------------------------------------------------------
# PROMPT ENHANCEMENT
# ---------------------------------------------------------------------------


class TestEnhance:

    def test_documents_cited_as_examples(self, composer, analysis):
        context = RetrievalContext(relevant_documents=[
            Document(id="a", text="Scale GPU training jobs on Kubernetes clusters with one command."),
            Document(id="b", text="short"),
        ])
        enhanced = composer.enhance("Launch post", context, analysis)

        assert enhanced == (
            "Launch post, matching the style of previous successful content: "
            '"Scale GPU training jobs on Kubernetes clusters with one command.", '
            "featuring blue, gold accents, with a calm atmosphere, in modern and bold style"
        )

    def test_long_examples_truncated(self, composer):
        context = RetrievalContext(relevant_documents=[Document(id="a", text="x" * 500)])
        enhanced = composer.enhance("Post", context, ThemeAnalysis())
        assert '"' + "x" * 200 + '"' in enhanced
        assert "x" * 201 not in enhanced

    def test_summaries_used_without_documents(self, composer):
        context = RetrievalContext(similar_summaries=["Compute Cloud: Kubernetes", "tiny"])
        enhanced = composer.enhance("Post", context, ThemeAnalysis())

        assert 'drawing inspiration from previous brand prompts: "Compute Cloud: Kubernetes"' in enhanced
        assert "tiny" not in enhanced
        assert enhanced.endswith("with a balanced atmosphere")

    def test_join_natural(self):
        assert join_natural([]) == ""
        assert join_natural(["a"]) == "a"
        assert join_natural(["a", "b", "c"]) == "a, b and c"


# ---------------------------------------------------------------------------
# QUALITY PREDICTION
# ---------------------------------------------------------------------------


class TestPredictQuality:

    def test_strong_inputs(self, composer, analysis):
        context = RetrievalContext(average_similarity=0.8)
        # 50 + 18 + 15 + 10 + 5
        assert composer.predict_quality(analysis, context, prompt_length=200) == 98

    def test_neutral_inputs(self, composer):
        assert composer.predict_quality(ThemeAnalysis(), RetrievalContext(), prompt_length=10) == 60

    @pytest.mark.parametrize("similarity,bonus", [(0.6, 10), (0.4, 5), (0.3, 0)])
    def test_similarity_tiers(self, composer, similarity, bonus):
        base = composer.predict_quality(ThemeAnalysis(), RetrievalContext(), 0)
        boosted = composer.predict_quality(ThemeAnalysis(), RetrievalContext(average_similarity=similarity), 0)
        assert boosted - base == bonus


# ---------------------------------------------------------------------------
# GENERATION PROMPTS
# ---------------------------------------------------------------------------


class TestGenerationPrompts:

    def test_branded_image_prompt(self, composer, ml_project, ml_theme):
        result = composer.build_branded_prompt(
            "Hero image", ml_project, ml_theme, "developers",
            {"composition": "centered", "avoid": "cartoon"},
        )

        assert result["prompt"].startswith(
            "Hero image, inspired by cloud native clusters, "
            "for Forge: MLOps platform for GPU training on Kubernetes, designed for developers audience"
        )
        assert result["prompt"].endswith("centered composition")
        assert "blurry" in result["negative_prompt"]
        assert result["negative_prompt"].endswith("cartoon")

    def test_branded_prompt_without_description(self, composer):
        result = composer.build_branded_prompt("Poster", Project(name="Solo"), Theme(name="Plain"))
        assert "for Solo," in result["prompt"]
        assert "inspired by" not in result["prompt"]

    def test_generation_prompt_lists_context(self, composer, ml_project, ml_theme):
        text = composer.build_generation_prompt("Announce GPU quotas", ml_project, ml_theme, 3)

        assert text.startswith("Generate 3 different variants of text content")
        assert "- Tags: Kubernetes, GPU, MLOps" in text
        assert "- Customer Type: Platform engineers" in text
        assert "- Prompt: Announce GPU quotas" in text
        assert VARIANT_START in text and VARIANT_END in text


# ---------------------------------------------------------------------------
# PARSING
# ---------------------------------------------------------------------------


class TestParseVariants:

    def test_marker_blocks(self):
        raw = "Sure! Here you go.\n" + wrap("First") + "\n" + wrap("Second") + "\nThanks"
        assert parse_variants(raw, 2) == ["First", "Second"]

    def test_sliced_to_count(self):
        raw = "".join(wrap(t) for t in ["a", "b", "c"])
        assert parse_variants(raw, 2) == ["a", "b"]

    def test_blank_line_fallback(self):
        raw = "Variant one\n\nVariant two\n   \nVariant three"
        assert parse_variants(raw, 5) == ["Variant one", "Variant two", "Variant three"]

    def test_empty_blocks_dropped(self):
        raw = wrap("   ") + wrap("Kept")
        assert parse_variants(raw, 3) == ["Kept"]

    def test_stray_marker_stripped(self):
        assert parse_variants(f"{VARIANT_START} Only one", 1) == ["Only one"]

    @pytest.mark.parametrize("raw,count", [("", 3), ("   ", 3), ("text", 0)])
    def test_empty_results(self, raw, count):
        assert parse_variants(raw, count) == []
