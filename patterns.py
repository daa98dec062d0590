"""Text shapes of a biography cell, shared by the loader and the parser."""

from __future__ import annotations

import re

LIFE_SPAN_DASH = "\u2013"

LIFE_SPAN_RE = re.compile(rf"(?<!\d)\d{{4}}\s*{LIFE_SPAN_DASH}\s*\d{{4}}(?!\d)")
BORN_RE = re.compile(r"(?<![A-Za-z])b\.\s+\d{4}(?!\d)")


def looks_biographical(text: str) -> bool:
    """True when text carries a life span or a birth marker."""
    return bool(LIFE_SPAN_RE.search(text) or BORN_RE.search(text))
