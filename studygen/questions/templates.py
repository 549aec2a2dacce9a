"""Bloom's-taxonomy question templates.

A question is ``"{starter} {subject}?"`` where the starter is drawn from the
Bloom level's starter phrases (plus a few phrases specific to the concept
type at that level) and the subject is the first words of the concept text
with trailing punctuation removed.
"""

import random
import re
from typing import Dict, List, Optional, Tuple, Union

from studygen.concepts import Concept
from studygen.errors import GenerationError
from studygen.taxonomy import BloomLevel, ConceptType, QuestionKind, parse_enum

BLOOM_STARTERS: Dict[BloomLevel, List[str]] = {
    BloomLevel.REMEMBER: ['What is', 'Define', 'Identify', 'List', 'Recall'],
    BloomLevel.UNDERSTAND: ['Explain in your own words', 'Describe', 'Interpret', 'Summarize', 'Paraphrase'],
    BloomLevel.APPLY: ['How would you use', 'Demonstrate', 'Solve', 'Implement', 'Apply'],
    BloomLevel.ANALYZE: ['Compare and contrast', 'Analyze', 'Differentiate', 'Examine', 'Investigate'],
    BloomLevel.EVALUATE: ['Evaluate', 'Justify', 'Critique', 'Assess', 'Recommend'],
    BloomLevel.CREATE: ['Design', 'Create', 'Develop', 'Propose', 'Invent'],
}

TYPE_STARTERS: Dict[Tuple[BloomLevel, ConceptType], List[str]] = {
    (BloomLevel.REMEMBER, ConceptType.PROCESS): ['What are the steps in', 'List the stages of'],
    (BloomLevel.REMEMBER, ConceptType.FACT): ['What are the key facts about'],
    (BloomLevel.UNDERSTAND, ConceptType.DEFINITION): ['Explain the meaning of'],
    (BloomLevel.UNDERSTAND, ConceptType.CAUSE_EFFECT): ['Explain why'],
    (BloomLevel.APPLY, ConceptType.PROCESS): ['How would you implement'],
    (BloomLevel.ANALYZE, ConceptType.FACT): ['What factors contribute to'],
    (BloomLevel.ANALYZE, ConceptType.CAUSE_EFFECT): ['Analyze the relationship in'],
    (BloomLevel.EVALUATE, ConceptType.PROCESS): ['Evaluate the efficiency of'],
    (BloomLevel.CREATE, ConceptType.PROCESS): ['Design a new approach to'],
}

SUBJECT_WORDS = 5
FALLBACK_SUBJECT = 'this concept'

_TRAILING_PUNCT_RE = re.compile(r'[\s.!?,;:]+$')


def starters_for(bloom_level: BloomLevel, concept_type: ConceptType) -> List[str]:
    return BLOOM_STARTERS[bloom_level] + TYPE_STARTERS.get((bloom_level, concept_type), [])


def question_subject(text: str) -> str:
    """First ``SUBJECT_WORDS`` words of ``text`` without trailing punctuation."""
    stripped = _TRAILING_PUNCT_RE.sub('', text)
    subject = ' '.join(stripped.split()[:SUBJECT_WORDS])
    subject = _TRAILING_PUNCT_RE.sub('', subject)
    return subject or FALLBACK_SUBJECT


class QuestionTemplateEngine:
    """Maps (concept type, Bloom level) to a question string.

    Attributes:
        rng: Random source used to pick a starter phrase
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def build_question(self, concept: Concept, bloom_level: Union[str, BloomLevel],
                       kind: Union[str, QuestionKind] = QuestionKind.FLASHCARD) -> str:
        """Compose a question about ``concept`` at the given Bloom level.

        Flashcards and MCQs share the same starter pool.

        Raises:
            InvalidParameterError: If bloom_level or kind is not recognised
            GenerationError: If the composed question fails validation
        """
        bloom_level = parse_enum(BloomLevel, bloom_level, 'bloom_level')
        kind = parse_enum(QuestionKind, kind, 'kind')

        starter = self.rng.choice(starters_for(bloom_level, concept.type))
        question = f'{starter} {question_subject(concept.text)}?'

        if not self._validate_question(question):
            raise GenerationError(f'Invalid {kind.value} question generated for {concept.id}: {question!r}')
        return question

    def _validate_question(self, question: str) -> bool:
        if not question or len(question) < 5:
            return False
        return question.endswith('?')
