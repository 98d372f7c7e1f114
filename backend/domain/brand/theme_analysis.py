"""
Theme analysis: colors, styles, mood, complexity and brand strength
"""

import logging
from typing import Dict, List, Optional

from domain.brand.types import ColorPalette, Theme, ThemeAnalysis

# keyword -> (palette slot, canonical color)
COLOR_MAPPING: Dict[str, tuple] = {
    "red": ("primary", "red"),
    "blue": ("primary", "blue"),
    "green": ("secondary", "green"),
    "yellow": ("accent", "yellow"),
    "orange": ("accent", "orange"),
    "purple": ("secondary", "purple"),
    "pink": ("secondary", "pink"),
    "black": ("primary", "black"),
    "white": ("primary", "white"),
    "gray": ("secondary", "gray"),
    "grey": ("secondary", "gray"),
    "gold": ("accent", "gold"),
    "silver": ("accent", "silver"),
}

STYLE_KEYWORDS: Dict[str, List[str]] = {
    "modern": ["modern", "contemporary", "sleek", "clean", "minimalist"],
    "vintage": ["vintage", "retro", "classic", "nostalgic"],
    "elegant": ["elegant", "sophisticated", "refined", "luxurious"],
    "bold": ["bold", "striking", "dramatic", "powerful"],
    "playful": ["playful", "fun", "whimsical", "creative"],
    "professional": ["professional", "corporate", "business", "formal"],
    "artistic": ["artistic", "creative", "expressive", "unique"],
    "minimalist": ["minimalist", "simple", "clean", "sparse"],
}

MOOD_KEYWORDS: Dict[str, List[str]] = {
    "energetic": ["energetic", "dynamic", "vibrant", "exciting"],
    "calm": ["calm", "serene", "peaceful", "tranquil"],
    "professional": ["professional", "serious", "formal", "trustworthy"],
    "friendly": ["friendly", "approachable", "warm", "welcoming"],
    "luxurious": ["luxurious", "premium", "elegant", "sophisticated"],
    "innovative": ["innovative", "cutting-edge", "futuristic", "tech"],
}

COMPLEXITY_STYLES = ["modern", "vintage", "elegant", "bold", "minimalist"]
BRAND_COLOR_WORDS = ["red", "blue", "green", "yellow", "black", "white"]


def _clamp(score: float) -> int:
    return int(max(0, min(100, score)))


class ThemeAnalyzer:
    """Keyword-driven analysis of a theme's name, tags and inspirations"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def _tokens(theme: Theme) -> str:
        return " ".join([*theme.tags, *theme.inspirations, theme.name]).lower()

    def analyze(self, theme: Theme) -> ThemeAnalysis:
        """Analyze theme and extract brand characteristics"""
        self.logger.info(f"Analyzing theme '{theme.name}'")

        style_scores = self.style_scores(theme)
        # Stable sort: equal scores keep STYLE_KEYWORDS order
        dominant_styles = [
            style for style, _ in sorted(style_scores.items(), key=lambda kv: kv[1], reverse=True)[:3]
        ]
        complexity = self.complexity_score(theme)
        brand_strength = self.brand_strength(theme)
        top_style_score = style_scores[dominant_styles[0]] if dominant_styles else 0

        return ThemeAnalysis(
            color_palette=self.color_palette(theme),
            style_score=round(top_style_score * 0.4 + complexity * 0.3 + brand_strength * 0.3),
            dominant_styles=dominant_styles,
            visual_mood=self.visual_mood(theme),
            complexity_score=complexity,
            brand_strength=brand_strength,
        )

    def color_palette(self, theme: Theme) -> ColorPalette:
        tokens = self._tokens(theme)
        palette = ColorPalette()

        for keyword, (slot, color) in COLOR_MAPPING.items():
            if keyword in tokens and color not in getattr(palette, slot):
                getattr(palette, slot).append(color)

        if not (palette.primary or palette.secondary or palette.accent):
            if "corporate" in tokens or "professional" in tokens:
                palette.primary = ["blue", "gray"]
                palette.accent = ["white"]
            elif "modern" in tokens:
                palette.primary = ["white", "black"]
                palette.secondary = ["gray"]
            else:
                palette.primary = ["blue"]
                palette.secondary = ["gray", "white"]

        if any(c in ("red", "orange", "yellow") for c in palette.accent):
            palette.mood = "energetic"
        elif "blue" in palette.primary:
            palette.mood = "professional"
        else:
            palette.mood = "balanced"
        return palette

    def style_scores(self, theme: Theme) -> Dict[str, int]:
        """+20 per matching keyword, capped at 100"""
        tokens = self._tokens(theme)
        return {
            style: min(sum(20 for k in keywords if k in tokens), 100)
            for style, keywords in STYLE_KEYWORDS.items()
        }

    def visual_mood(self, theme: Theme) -> str:
        tokens = self._tokens(theme)
        dominant, best = "balanced", 0
        for mood, keywords in MOOD_KEYWORDS.items():
            hits = sum(1 for k in keywords if k in tokens)
            if hits > best:
                dominant, best = mood, hits
        return dominant

    def complexity_score(self, theme: Theme) -> int:
        score = 50
        score += min(len(theme.tags) * 5, 20)
        score += min(len(theme.inspirations) * 5, 15)
        if len(theme.name.split()) > 2:
            score += 10
        tokens = self._tokens(theme)
        if sum(1 for s in COMPLEXITY_STYLES if s in tokens) > 2:
            score += 15
        return _clamp(score)

    def brand_strength(self, theme: Theme) -> int:
        score = 30
        if len(theme.tags) >= 5:
            score += 25
        elif len(theme.tags) >= 3:
            score += 15

        if len(theme.inspirations) >= 3:
            score += 20
        elif len(theme.inspirations) >= 1:
            score += 10

        if len(theme.name.split()) > 1:
            score += 15
        if any(c in self._tokens(theme) for c in BRAND_COLOR_WORDS):
            score += 10
        return _clamp(score)
