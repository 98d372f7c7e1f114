"""
Derived-value cache for theme analysis
"""

import hashlib
import json
import logging
from typing import Dict, Optional, Tuple

from domain.brand.theme_analysis import ThemeAnalyzer
from domain.brand.types import Theme, ThemeAnalysis


def theme_fingerprint(theme: Theme) -> str:
    """Hash of the fields theme analysis reads"""
    payload = json.dumps(
        {"name": theme.name, "tags": theme.tags, "inspirations": theme.inspirations},
        sort_keys=True,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class ThemeAnalysisCache:
    """
    Cache of ThemeAnalysis keyed by theme id.

    The theme object is never mutated. An entry is reused only while the
    theme's fingerprint is unchanged; otherwise analysis is recomputed and
    the entry replaced. Themes without an id are always computed fresh.
    """

    def __init__(self, analyzer: Optional[ThemeAnalyzer] = None, logger: Optional[logging.Logger] = None):
        self.analyzer = analyzer or ThemeAnalyzer()
        self.logger = logger or logging.getLogger(__name__)
        self._entries: Dict[str, Tuple[str, ThemeAnalysis]] = {}

    def get(self, theme: Theme) -> Optional[ThemeAnalysis]:
        """Cached analysis if present and still valid for this theme"""
        if theme.id is None or theme.id not in self._entries:
            return None
        fingerprint, analysis = self._entries[theme.id]
        if fingerprint != theme_fingerprint(theme):
            return None
        return analysis

    def get_or_compute(self, theme: Theme) -> ThemeAnalysis:
        """Reuse a valid cached analysis or compute and store a new one"""
        cached = self.get(theme)
        if cached is not None:
            self.logger.debug(f"Theme analysis cache hit for {theme.id}")
            return cached

        analysis = self.analyzer.analyze(theme)
        if theme.id is not None:
            self.logger.debug(f"Theme analysis cached for {theme.id}")
            self._entries[theme.id] = (theme_fingerprint(theme), analysis)
        return analysis

    def invalidate(self, theme_id: str) -> None:
        self._entries.pop(theme_id, None)

    def __len__(self) -> int:
        return len(self._entries)
