"""Flashcard generation from ranked concepts.

Each concept in the slice becomes one question/answer card:

- question: Bloom-level template from ``QuestionTemplateEngine``
- answer: leading ``ANSWER_MAX_CHARS`` characters of the concept text
- category: derived from the concept type
- tags: auto-generated marker, difficulty, Bloom level and concept type

Concepts are consumed in ranked order and never reordered.
"""

import random
from typing import Iterable, List, Optional, Union

from pydantic import ValidationError

from studygen.concepts import Concept, coerce_concepts
from studygen.errors import GenerationError
from studygen.models import FlashcardOutput
from studygen.questions import QuestionTemplateEngine
from studygen.taxonomy import BloomLevel, Difficulty, QuestionKind, category_for, parse_count, parse_enum
from studygen.utils import generate_id, get_logger

LOG = get_logger()

ANSWER_MAX_CHARS = 120
AUTO_GENERATED_TAG = 'auto-generated'


class FlashcardGenerator:
    """Builds flashcard records from a concept slice.

    Attributes:
        rng: Random source for starter choice and card ids
        template_engine: Question builder sharing ``rng`` unless supplied
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 template_engine: Optional[QuestionTemplateEngine] = None):
        self.rng = rng or random.Random()
        self.template_engine = template_engine or QuestionTemplateEngine(self.rng)

    def generate(self, concepts: Iterable[Union[Concept, str]], count: int,
                 difficulty: Union[str, Difficulty], bloom_level: Union[str, BloomLevel]) -> List[FlashcardOutput]:
        """Generate ``min(count, len(concepts))`` flashcards.

        Args:
            concepts: Ranked concepts (bare strings are treated as general concepts)
            count: Maximum number of cards
            difficulty: Difficulty tier stamped on every card
            bloom_level: Bloom level driving question phrasing

        Returns:
            Flashcards in the same order as ``concepts``

        Raises:
            InvalidParameterError: If difficulty or bloom_level is not recognised, or count is not an int
            GenerationError: If a card fails model validation
        """
        difficulty = parse_enum(Difficulty, difficulty, 'difficulty')
        bloom_level = parse_enum(BloomLevel, bloom_level, 'bloom_level')
        count = parse_count(count, 'count')
        if count < 1:
            return []

        flashcards = []
        for concept in coerce_concepts(concepts)[:count]:
            flashcards.append(self._build_flashcard(concept, difficulty, bloom_level))

        LOG.debug('flashcards_generated', extra={'count': len(flashcards), 'requested': count})
        return flashcards

    def _build_flashcard(self, concept: Concept, difficulty: Difficulty, bloom_level: BloomLevel) -> FlashcardOutput:
        question = self.template_engine.build_question(concept, bloom_level, QuestionKind.FLASHCARD)
        try:
            return FlashcardOutput(
                id=generate_id('flashcard', self.rng),
                question=question,
                answer=concept.text[:ANSWER_MAX_CHARS],
                difficulty=difficulty,
                bloom_level=bloom_level,
                category=category_for(concept.type),
                tags=[AUTO_GENERATED_TAG, difficulty.value, bloom_level.value, concept.type.value],
            )
        except ValidationError as e:
            raise GenerationError(f'Flashcard for {concept.id} failed validation: {e}') from e


def generate_flashcards(concepts: Iterable[Union[Concept, str]], count: int, difficulty: Union[str, Difficulty],
                        bloom_level: Union[str, BloomLevel], seed: Optional[int] = None) -> List[FlashcardOutput]:
    return FlashcardGenerator(random.Random(seed)).generate(concepts, count, difficulty, bloom_level)
