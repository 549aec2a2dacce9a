"""Multiple-choice question generation from ranked concepts.

Per concept the generator builds one question with four options: the leading
``OPTION_MAX_CHARS`` characters of the concept text plus three templated
distractors. Options are shuffled with the injected random source and the
correct index is located after the shuffle, never assumed.
"""

import random
from typing import Iterable, List, Optional, Union

from pydantic import ValidationError

from studygen.concepts import Concept, coerce_concepts
from studygen.errors import GenerationError
from studygen.flashcards import AUTO_GENERATED_TAG
from studygen.models import MCQOutput
from studygen.questions import QuestionTemplateEngine
from studygen.taxonomy import BloomLevel, Difficulty, QuestionKind, category_for, parse_count, parse_enum
from studygen.utils import generate_id, get_logger

from .distractors import synthesize_distractors

LOG = get_logger()

OPTION_MAX_CHARS = 60
EXPLANATION_MAX_CHARS = 80
MCQ_TAG = 'mcq'


def shuffle_options(options: List[str], rng: random.Random) -> List[str]:
    """Return a uniformly shuffled copy of ``options`` (Fisher-Yates via ``rng.shuffle``)."""
    shuffled = list(options)
    rng.shuffle(shuffled)
    return shuffled


class MCQGenerator:
    """Builds MCQ records from a concept slice.

    Attributes:
        rng: Random source for starter choice, option shuffling and ids
        template_engine: Question builder sharing ``rng`` unless supplied
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 template_engine: Optional[QuestionTemplateEngine] = None):
        self.rng = rng or random.Random()
        self.template_engine = template_engine or QuestionTemplateEngine(self.rng)

    def generate(self, concepts: Iterable[Union[Concept, str]], count: int,
                 difficulty: Union[str, Difficulty], bloom_level: Union[str, BloomLevel]) -> List[MCQOutput]:
        """Generate up to ``count`` MCQs, one per concept in ranked order.

        An empty concept slice yields an empty list rather than an error.

        Raises:
            InvalidParameterError: If difficulty or bloom_level is not recognised, or count is not an int
            GenerationError: If an MCQ fails model validation
        """
        difficulty = parse_enum(Difficulty, difficulty, 'difficulty')
        bloom_level = parse_enum(BloomLevel, bloom_level, 'bloom_level')
        count = parse_count(count, 'count')
        if count < 1:
            return []

        usable = coerce_concepts(concepts)
        if not usable:
            LOG.debug('mcq_no_usable_concepts', extra={'requested': count})
            return []

        mcqs = [self._build_mcq(concept, difficulty, bloom_level) for concept in usable[:count]]
        LOG.debug('mcqs_generated', extra={'count': len(mcqs), 'requested': count})
        return mcqs

    def _build_mcq(self, concept: Concept, difficulty: Difficulty, bloom_level: BloomLevel) -> MCQOutput:
        question = self.template_engine.build_question(concept, bloom_level, QuestionKind.MCQ)

        correct_option = concept.text[:OPTION_MAX_CHARS]
        options = shuffle_options([correct_option] + synthesize_distractors(concept, correct_option), self.rng)

        try:
            return MCQOutput(
                id=generate_id('mcq', self.rng),
                question=question,
                options=options,
                correct_answer_index=options.index(correct_option),
                explanation=f'Based on: {concept.text[:EXPLANATION_MAX_CHARS]}...',
                difficulty=difficulty,
                bloom_level=bloom_level,
                category=category_for(concept.type),
                tags=[AUTO_GENERATED_TAG, difficulty.value, bloom_level.value, concept.type.value, MCQ_TAG],
            )
        except ValidationError as e:
            raise GenerationError(f'MCQ for {concept.id} failed validation: {e}') from e


def generate_mcqs(concepts: Iterable[Union[Concept, str]], count: int, difficulty: Union[str, Difficulty],
                  bloom_level: Union[str, BloomLevel], seed: Optional[int] = None) -> List[MCQOutput]:
    return MCQGenerator(random.Random(seed)).generate(concepts, count, difficulty, bloom_level)
