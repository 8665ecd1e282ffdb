# tests/services/test_toxicity.py
"""Advisory content signal shown to jurors."""
from __future__ import annotations

from open_court.services.toxicity import analyze_content


def test_clean_text_scores_zero() -> None:
    """Test that harmless text scores zero with low confidence."""
    signal = analyze_content("Thanks for sharing this recipe")
    assert signal.toxicity_score == 0
    assert signal.flagged_keywords == []
    assert signal.confidence == "Low"


def test_keywords_caps_and_punctuation() -> None:
    """Test scoring of keywords, shouting and punctuation runs."""
    signal = analyze_content("YOU ARE AN IDIOT AND A LOSER!!!")
    assert "idiot" in signal.flagged_keywords
    assert "loser" in signal.flagged_keywords
    assert "EXCESSIVE CAPS" in signal.flagged_keywords
    # two keywords, caps and a punctuation run
    assert signal.toxicity_score == 15 * 2 + 20 + 10
    assert signal.confidence == "High"


def test_score_is_capped_and_flags_truncated() -> None:
    """Test the score cap and the flag limit."""
    text = "stupid idiot dumb moron hate trash garbage worthless scam spam"
    signal = analyze_content(text)
    assert signal.toxicity_score == 100
    assert len(signal.flagged_keywords) == 5


def test_empty_text() -> None:
    """Test that empty text scores zero."""
    assert analyze_content("").toxicity_score == 0
