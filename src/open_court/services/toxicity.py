"""Keyword heuristic that gives jurors a rough signal about reported text.

The signal is advisory only; verdicts are decided by jurors alone.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

TOXIC_TERMS: tuple[str, ...] = (
    "stupid", "idiot", "dumb", "moron", "hate", "kill", "die", "ugly",
    "loser", "pathetic", "disgusting", "trash", "garbage", "worthless",
    "shut up", "get out", "go away", "nobody cares", "you suck",
    "fake", "scam", "spam", "click here", "link in bio", "1000x",
    "crypto", "nft", "free money", "guaranteed",
)

KEYWORD_WEIGHT = 15
CAPS_WEIGHT = 20
PUNCTUATION_WEIGHT = 10
MAX_SCORE = 100
MAX_REPORTED_FLAGS = 5

_REPEATED_PUNCTUATION = re.compile(r"[!?]{2,}")


@dataclass(frozen=True)
class ContentSignal:
    """Heuristic toxicity estimate for a piece of text."""

    toxicity_score: int = 0
    flagged_keywords: list[str] = field(default_factory=list)
    confidence: str = "Low"


def analyze_content(text: str) -> ContentSignal:
    """Score ``text`` by keyword hits, shouting and punctuation runs."""
    if not text:
        return ContentSignal()

    lowered = text.lower()
    flagged = [term for term in TOXIC_TERMS if term in lowered]
    score = KEYWORD_WEIGHT * len(flagged)

    caps_ratio = sum(1 for ch in text if "A" <= ch <= "Z") / len(text)
    if caps_ratio > 0.5 and len(text) > 10:
        score += CAPS_WEIGHT
        flagged.append("EXCESSIVE CAPS")

    if _REPEATED_PUNCTUATION.search(text):
        score += PUNCTUATION_WEIGHT

    if len(flagged) >= 3:
        confidence = "High"
    elif flagged:
        confidence = "Medium"
    else:
        confidence = "Low"

    return ContentSignal(
        toxicity_score=min(MAX_SCORE, score),
        flagged_keywords=flagged[:MAX_REPORTED_FLAGS],
        confidence=confidence,
    )
