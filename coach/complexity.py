"""
Complexity extraction from free-text model replies.

Best effort only: a complexity mentioned for a sub-step can be picked over
the overall one.
"""
from __future__ import annotations

import re

from .models import UNKNOWN_COMPLEXITY, ComplexityEstimate


def _patterns(label: str) -> tuple[re.Pattern, ...]:
    return (
        re.compile(rf"{label}\s+complexity[:\s]*(O\([^)]+\))", re.IGNORECASE),
        re.compile(rf"{label}[:\s]*(O\([^)]+\))", re.IGNORECASE),
        re.compile(rf"(O\([^)]+\))\s+{label}", re.IGNORECASE),
    )


TIME_PATTERNS = _patterns("time")
SPACE_PATTERNS = _patterns("space")
BIG_O = re.compile(r"O\([^)]+\)", re.IGNORECASE)


def _first_notation(text: str, patterns: tuple[re.Pattern, ...]) -> str:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            notation = BIG_O.search(match.group(0))
            if notation:
                return notation.group(0)
    return UNKNOWN_COMPLEXITY


def extract_complexity(text: str) -> ComplexityEstimate:
    """Pull a time/space Big-O pair out of text, O(?) where absent."""
    if not text:
        return ComplexityEstimate()
    return ComplexityEstimate(
        time=_first_notation(text, TIME_PATTERNS),
        space=_first_notation(text, SPACE_PATTERNS),
    )
