"""Concept extraction from free-form study text.

The extractor is the first stage of the content pipeline. It turns raw prose
into a ranked list of ``Concept`` records:

1. Split the text into paragraphs on blank lines and drop short ones
2. Find capitalized clauses ending in sentence punctuation
3. Classify each clause with the ordered rules in ``rules.py``
4. Score each concept with the deterministic feature score in ``scoring.py``
5. Fall back to plain sentences tagged ``general`` when no clause matched
6. Sort by importance (stable) and optionally truncate

Usage Example:
    from studygen.concepts import ConceptExtractor

    concepts = ConceptExtractor().extract(text, max_concepts=10)
    for concept in concepts:
        print(concept.type.value, concept.importance, concept.text)
"""

import re
import time
from typing import Iterable, List, Optional, Union

from studygen.errors import EmptyInputError, InvalidParameterError, NoConceptsExtractedError
from studygen.taxonomy import ConceptType
from studygen.utils import get_logger, log_concept_extraction

from .models import Concept
from .rules import CLASSIFICATION_RULES, ClassificationRule, classify
from .scoring import FALLBACK_BAND, PRIMARY_BAND, score_importance

LOG = get_logger()

PARAGRAPH_SPLIT_RE = re.compile(r'\n\s*\n')
# clauses start at a capitalized word; a '.' followed by a digit is a decimal point
CLAUSE_RE = re.compile(r'\b[A-Z](?:[^.!?]|\.(?=\d))*(?:[!?]|\.(?!\d))')
SENTENCE_SPLIT_RE = re.compile(r'[.!?]+(?=\s|$)')

MIN_PARAGRAPH_CHARS = 50
MIN_CLAUSE_CHARS = 20
MIN_SENTENCE_CHARS = 30
MAX_FALLBACK_SENTENCES = 10
EXCERPT_CHARS = 100


def _normalize_whitespace(text: str) -> str:
    return ' '.join(text.split())


def _excerpt(paragraph: str) -> str:
    return paragraph[:EXCERPT_CHARS] + '...'


class ConceptExtractor:
    """Classifies source text into ranked candidate concepts.

    Attributes:
        rules: Ordered classification rules; the first match decides the type
    """

    def __init__(self, rules: Optional[Iterable[ClassificationRule]] = None):
        self.rules = tuple(rules) if rules is not None else CLASSIFICATION_RULES

    def extract(self, text: str, max_concepts: Optional[int] = None) -> List[Concept]:
        """Extract concepts from ``text`` ranked by importance.

        Args:
            text: Source prose, already extracted from its original format
            max_concepts: Optional positive cap applied after ranking

        Returns:
            Concepts sorted non-increasing by importance

        Raises:
            EmptyInputError: If text is blank or not a string
            InvalidParameterError: If max_concepts is not a positive int
            NoConceptsExtractedError: If both extraction paths came up empty
        """
        if not isinstance(text, str) or not text.strip():
            raise EmptyInputError('Source text is empty')
        if max_concepts is not None and (
            isinstance(max_concepts, bool) or not isinstance(max_concepts, int) or max_concepts < 1
        ):
            raise InvalidParameterError(f'max_concepts must be a positive integer, got {max_concepts!r}')

        start = time.time()
        paragraphs = self._split_paragraphs(text)
        concepts = self._extract_from_paragraphs(paragraphs)

        used_fallback = False
        if not concepts:
            used_fallback = True
            LOG.debug('concept_extraction_fallback', extra={'paragraph_count': len(paragraphs)})
            concepts = self._extract_from_sentences(text)

        if not concepts:
            raise NoConceptsExtractedError('No educational concepts could be extracted from the provided content')

        ranked = sorted(concepts, key=lambda c: c.importance, reverse=True)
        if max_concepts is not None:
            ranked = ranked[:max_concepts]

        duration_ms = int((time.time() - start) * 1000)
        log_concept_extraction(
            source_length=len(text),
            paragraph_count=len(paragraphs),
            concept_count=len(ranked),
            used_fallback=used_fallback,
            duration_ms=duration_ms,
        )
        return ranked

    def _split_paragraphs(self, text: str) -> List[str]:
        paragraphs = (p.strip() for p in PARAGRAPH_SPLIT_RE.split(text))
        return [p for p in paragraphs if len(p) >= MIN_PARAGRAPH_CHARS]

    def _extract_from_paragraphs(self, paragraphs: List[str]) -> List[Concept]:
        concepts: List[Concept] = []
        for paragraph in paragraphs:
            excerpt = _excerpt(paragraph)
            seen = set()
            for match in CLAUSE_RE.finditer(paragraph):
                clause = _normalize_whitespace(match.group(0))
                if len(clause) <= MIN_CLAUSE_CHARS or clause in seen:
                    continue
                concept_type = classify(clause, self.rules)
                if concept_type is None:
                    continue
                seen.add(clause)
                concepts.append(Concept(
                    id=f'concept-{len(concepts)}',
                    text=clause,
                    type=concept_type,
                    source_excerpt=excerpt,
                    importance=score_importance(clause, PRIMARY_BAND, self.rules),
                ))
        return concepts

    def _extract_from_sentences(self, text: str) -> List[Concept]:
        sentences = [s.strip() for s in SENTENCE_SPLIT_RE.split(text)]
        sentences = [s for s in sentences if len(s) >= MIN_SENTENCE_CHARS]

        concepts: List[Concept] = []
        for index, sentence in enumerate(sentences[:MAX_FALLBACK_SENTENCES]):
            sentence = _normalize_whitespace(sentence)
            concepts.append(Concept(
                id=f'concept-{index}',
                text=sentence,
                type=ConceptType.GENERAL,
                source_excerpt=sentence,
                importance=score_importance(sentence, FALLBACK_BAND, self.rules),
            ))
        return concepts


def extract_concepts(text: str, max_concepts: Optional[int] = None) -> List[Concept]:
    return ConceptExtractor().extract(text, max_concepts=max_concepts)


def coerce_concepts(items: Iterable[Union[Concept, str]]) -> List[Concept]:
    """Accept ready concepts or bare strings; strings become ``general`` concepts.

    Blank strings are not usable and are dropped.
    """
    concepts: List[Concept] = []
    for index, item in enumerate(items):
        if isinstance(item, Concept):
            concepts.append(item)
            continue
        if not isinstance(item, str):
            raise InvalidParameterError(f'Expected Concept or str, got {type(item).__name__}')
        text = _normalize_whitespace(item)
        if not text:
            continue
        concepts.append(Concept(
            id=f'concept-{index}',
            text=text,
            type=ConceptType.GENERAL,
            source_excerpt=text,
            importance=score_importance(text, FALLBACK_BAND),
        ))
    return concepts
