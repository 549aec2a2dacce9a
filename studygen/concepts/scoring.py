"""Deterministic importance scoring for extracted concepts.

The score blends two text features into [0, 1) and maps the result into the
band of the extraction tier that produced the concept:

- length: word count, saturating at ``IDEAL_WORDS``
- cue density: classification cues per word, scaled and capped at 1

Pattern-derived concepts land in ``PRIMARY_BAND`` and sentence-fallback
concepts in ``FALLBACK_BAND``. The same text always gets the same score.
"""

from typing import Iterable, Tuple

from .rules import CLASSIFICATION_RULES, ClassificationRule, count_cues

PRIMARY_BAND: Tuple[float, float] = (0.8, 1.0)
FALLBACK_BAND: Tuple[float, float] = (0.6, 0.9)

IDEAL_WORDS = 25
CUE_DENSITY_SCALE = 4.0
LENGTH_WEIGHT = 0.6
CUE_WEIGHT = 0.4
# keeps the score strictly below the band's upper bound
MAX_FEATURE = 0.999


def feature_score(text: str, rules: Iterable[ClassificationRule] = CLASSIFICATION_RULES) -> float:
    words = text.split()
    if not words:
        return 0.0
    length_score = min(len(words), IDEAL_WORDS) / IDEAL_WORDS
    density = min(1.0, count_cues(text, rules) / len(words) * CUE_DENSITY_SCALE)
    return LENGTH_WEIGHT * length_score + CUE_WEIGHT * density


def score_importance(text: str, band: Tuple[float, float] = PRIMARY_BAND,
                     rules: Iterable[ClassificationRule] = CLASSIFICATION_RULES) -> float:
    low, high = band
    feature = min(feature_score(text, rules), MAX_FEATURE)
    return round(low + (high - low) * feature, 6)
