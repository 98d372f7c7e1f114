"""
Parse delimited variants out of raw generator output
"""

import re
from typing import List

VARIANT_START = "---VARIANT_START---"
VARIANT_END = "---VARIANT_END---"

_VARIANT_RE = re.compile(re.escape(VARIANT_START) + r"(.*?)" + re.escape(VARIANT_END), re.DOTALL)
_BLANK_LINE_RE = re.compile(r"\n\s*\n")


def parse_variants(raw: str, count: int) -> List[str]:
    """
    Split generator output into at most `count` variants.

    Marker-delimited blocks are preferred; without markers the text is split
    on blank lines. Stray markers and surrounding whitespace are stripped and
    empty pieces dropped.
    """
    if count <= 0 or not raw or not raw.strip():
        return []

    pieces = _VARIANT_RE.findall(raw)
    if not pieces:
        pieces = _BLANK_LINE_RE.split(raw)

    variants = []
    for piece in pieces:
        cleaned = piece.replace(VARIANT_START, "").replace(VARIANT_END, "").strip()
        if cleaned:
            variants.append(cleaned)
    return variants[:count]
