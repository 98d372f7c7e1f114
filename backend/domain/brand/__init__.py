"""
Brand metadata and theme analysis
"""

from domain.brand.types import Theme, Project, ColorPalette, ThemeAnalysis
from domain.brand.theme_analysis import ThemeAnalyzer
from domain.brand.cache import ThemeAnalysisCache, theme_fingerprint

__all__ = [
    "Theme",
    "Project",
    "ColorPalette",
    "ThemeAnalysis",
    "ThemeAnalyzer",
    "ThemeAnalysisCache",
    "theme_fingerprint",
]
