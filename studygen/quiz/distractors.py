import re
from typing import Dict, List

from studygen.concepts import Concept
from studygen.errors import GenerationError
from studygen.taxonomy import ConceptType

DISTRACTOR_COUNT = 3
LEAD_WORDS = 2

# Templated transformations of the concept's leading words
DISTRACTOR_TEMPLATES = [
    'Alternative perspective on {lead}',
    'Common misconception about {lead}',
    'Historical context of {lead}',
]

# Used only when a templated distractor collides with another option
TYPE_DISTRACTORS: Dict[ConceptType, List[str]] = {
    ConceptType.DEFINITION: [
        'A process that occurs in different circumstances',
        'A concept not related to this topic',
        'An outdated theory that has been disproven',
    ],
    ConceptType.FACT: [
        'A common misconception about this topic',
        'Information from a different field of study',
        'A theoretical assumption without evidence',
    ],
    ConceptType.PROCESS: [
        'A different sequence of events',
        'An alternative method not discussed',
        'A process that occurs in reverse order',
    ],
}
DEFAULT_TYPE_DISTRACTORS = [
    'An unrelated concept from this field',
    'A contradictory statement',
    'Information not supported by the source',
]

_TRAILING_PUNCT_RE = re.compile(r'[.!?,;:]+$')


def lead_words(text: str, count: int = LEAD_WORDS) -> str:
    words = [_TRAILING_PUNCT_RE.sub('', w) for w in text.split()[:count]]
    return ' '.join(w for w in words if w) or 'this topic'


def synthesize_distractors(concept: Concept, correct_option: str) -> List[str]:
    """Return exactly ``DISTRACTOR_COUNT`` distractors distinct from each other and the correct option."""
    lead = lead_words(concept.text)
    candidates = [t.format(lead=lead) for t in DISTRACTOR_TEMPLATES]
    candidates += TYPE_DISTRACTORS.get(concept.type, DEFAULT_TYPE_DISTRACTORS)
    candidates += DEFAULT_TYPE_DISTRACTORS

    distractors: List[str] = []
    taken = {correct_option}
    for candidate in candidates:
        if candidate in taken:
            continue
        distractors.append(candidate)
        taken.add(candidate)
        if len(distractors) == DISTRACTOR_COUNT:
            return distractors

    raise GenerationError(f'Could not build {DISTRACTOR_COUNT} distinct distractors for {concept.id}')
