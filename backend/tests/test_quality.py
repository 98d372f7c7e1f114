"""
Unit tests for heuristic quality scorers
"""

import pytest

from domain.brand.types import Theme
from domain.evaluation.quality import score_image_prompt_quality, score_prompt_quality, score_text_quality


# ---------------------------------------------------------------------------
# TEXT QUALITY
# ---------------------------------------------------------------------------


class TestTextQuality:

    def test_empty_text_scores_60(self):
        assert score_text_quality("") == 60
        assert score_text_quality("   \n") == 60

    def test_well_formed_copy(self, ml_content):
        # baseline 70 + length 10 + sentences 5 + word length 5
        assert score_text_quality(ml_content) == 90

    def test_short_text_penalized(self):
        # 3 words: -10, average length 5 -> +5
        assert score_text_quality("Great coffee beans") == 65

    def test_exclamation_marks_penalized(self, ml_content):
        assert score_text_quality(ml_content + " Wow!!!!") < score_text_quality(ml_content + " Wow.")

    def test_shouting_penalized(self):
        calm = "Our platform makes cluster scheduling simple for every team member today"
        loud = "OUR PLATFORM MAKES cluster scheduling simple for every team member today"
        assert score_text_quality(loud) == score_text_quality(calm) - 10

    def test_professional_vocabulary_bonus_is_capped(self):
        # long filler words keep the average word length above 8 in every case
        base = "wordsmith " * 25
        one = base + "innovative"
        many = base + "innovative professional seamless efficient experience solution"
        assert score_text_quality(one) - score_text_quality(base) == 3
        assert score_text_quality(many) - score_text_quality(base) == 10

    @pytest.mark.parametrize("text", ["!" * 700, "A" * 5000, "x " * 1000, "?!." * 300])
    def test_pathological_input_clamped(self, text):
        assert 0 <= score_text_quality(text) <= 100

    def test_non_string_rejected(self):
        with pytest.raises(TypeError):
            score_text_quality(None)


# ---------------------------------------------------------------------------
# IMAGE PROMPT QUALITY
# ---------------------------------------------------------------------------


class TestImagePromptQuality:

    def test_theme_aware_prompt_scores_higher(self, ocean_theme):
        prompt = (
            "A detailed, high quality photo of seaweed and coral weaving on a loom, "
            "vibrant blue tones, centered composition, inspired by tide pools"
        )
        assert score_image_prompt_quality(prompt, ocean_theme) > score_image_prompt_quality(prompt)

    def test_degrading_phrases_penalized(self):
        clean = "A detailed product shot of a ceramic mug on a wooden table in morning light"
        assert score_image_prompt_quality(clean + ", blurry") < score_image_prompt_quality(clean)

    def test_very_short_prompt(self):
        assert score_image_prompt_quality("a mug") == 45

    def test_clamped(self):
        theme = Theme(tags=[f"tag{i}" for i in range(10)], inspirations=["a", "b", "c"])
        prompt = " ".join(theme.tags) + " high quality detailed professional premium modern elegant bold red layout a b c"
        assert score_image_prompt_quality(prompt, theme) <= 100


# ---------------------------------------------------------------------------
# USER PROMPT QUALITY
# ---------------------------------------------------------------------------


class TestPromptQuality:

    def test_short_prompt_below_baseline(self):
        assert score_prompt_quality("coffee ad", ["coffee"]) < 50

    def test_good_length_with_tags(self):
        prompt = (
            "Write a warm launch announcement for our new single origin espresso roast "
            "that highlights the coffee farmers, the tasting notes, and a limited time offer"
        )
        assert score_prompt_quality(prompt, ["espresso", "coffee"]) == 75

    def test_tag_bonus_capped(self):
        tags = [f"t{i}" for i in range(10)]
        prompt = " ".join(tags * 3)
        assert score_prompt_quality(prompt, tags) == 50 + 15 + 20
