"""Ordered clause-classification rules.

Each rule pairs a concept type with a cue predicate. Rules are evaluated in
list order and the first match wins, so a clause carrying both a definition
cue and a fact cue is always a definition. Swapping the regex predicates for a
tokenizer or classifier only means replacing ``CLASSIFICATION_RULES``.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Pattern

from studygen.taxonomy import ConceptType


@dataclass(frozen=True)
class ClassificationRule:
    concept_type: ConceptType
    pattern: Pattern[str]

    def matches(self, clause: str) -> bool:
        return self.pattern.search(clause) is not None

    def count(self, clause: str) -> int:
        return len(self.pattern.findall(clause))


def _cue(pattern: str) -> Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


CLASSIFICATION_RULES = (
    ClassificationRule(ConceptType.DEFINITION, _cue(r'\b(?:is|are|means|refers to|defined as)\b')),
    ClassificationRule(ConceptType.FACT, _cue(r'\d+|\bduring\b|\bcaused by\b|\bresults in\b')),
    ClassificationRule(ConceptType.PROCESS, _cue(r'\b(?:first|then|next|finally|steps?|process(?:es)?)\b')),
    ClassificationRule(ConceptType.CAUSE_EFFECT, _cue(r'\b(?:because|due to|leads? to|causes?|results?)\b')),
)


def classify(clause: str, rules: Iterable[ClassificationRule] = CLASSIFICATION_RULES) -> Optional[ConceptType]:
    """Return the type of the first rule matching ``clause``, or None."""
    for rule in rules:
        if rule.matches(clause):
            return rule.concept_type
    return None


def count_cues(clause: str, rules: Iterable[ClassificationRule] = CLASSIFICATION_RULES) -> int:
    return sum(rule.count(clause) for rule in rules)
