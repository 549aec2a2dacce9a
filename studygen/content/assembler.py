"""End-to-end assembly of study content from source text.

The assembler runs the concept extractor once, partitions the ranked concepts
into a flashcard slice ``[0, F)`` and a disjoint MCQ slice ``[F, F + M)``,
runs both generators and wraps the result with timing metadata.

Randomness is per request: a fresh ``random.Random`` (seeded when a seed is
given) hands each branch its own child generator before any work is
dispatched, so sequential and concurrent runs produce identical content.
"""

import asyncio
import random
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from studygen.concepts import Concept, ConceptExtractor
from studygen.config import Settings, get_settings
from studygen.errors import GenerationError
from studygen.flashcards import FlashcardGenerator
from studygen.models import EducationContent, EducationContentMetadata, FlashcardOutput, MCQOutput
from studygen.quiz import MCQGenerator
from studygen.taxonomy import BloomLevel, Difficulty, parse_count, parse_enum
from studygen.utils import get_logger, log_content_generation

LOG = get_logger()

SOURCE_PREVIEW_CHARS = 200


@dataclass(frozen=True)
class _GenerationPlan:
    text: str
    concepts: List[Concept]
    flashcard_slice: List[Concept]
    mcq_slice: List[Concept]
    flashcard_count: int
    mcq_count: int
    difficulty: Difficulty
    bloom_level: BloomLevel
    flashcard_rng: random.Random
    mcq_rng: random.Random
    seeded: bool
    started_at: float


def _source_preview(text: str) -> str:
    if len(text) <= SOURCE_PREVIEW_CHARS:
        return text
    return text[:SOURCE_PREVIEW_CHARS] + '...'


class ContentAssembler:
    """Runs extraction and both generators and returns one ``EducationContent``.

    Attributes:
        extractor: Concept extractor shared across requests (stateless)
        settings: Count bounds and the default seed
    """

    def __init__(self, extractor: Optional[ConceptExtractor] = None, settings: Optional[Settings] = None):
        self.extractor = extractor or ConceptExtractor()
        self.settings = settings or get_settings()

    def assemble(self, text: str, flashcard_count: int, mcq_count: int,
                 difficulty: Union[str, Difficulty], bloom_level: Union[str, BloomLevel],
                 seed: Optional[int] = None) -> EducationContent:
        """Generate flashcards and MCQs from ``text``.

        Raises:
            InvalidParameterError: If counts or enums are out of range
            EmptyInputError: If text is blank
            NoConceptsExtractedError: If no concept could be extracted
            GenerationError: If either generator fails; no partial content is returned
        """
        plan = self._plan(text, flashcard_count, mcq_count, difficulty, bloom_level, seed)
        flashcards = self._run_flashcards(plan)
        mcqs = self._run_mcqs(plan)
        return self._finish(plan, flashcards, mcqs)

    async def assemble_async(self, text: str, flashcard_count: int, mcq_count: int,
                             difficulty: Union[str, Difficulty], bloom_level: Union[str, BloomLevel],
                             seed: Optional[int] = None) -> EducationContent:
        """Same contract as ``assemble`` with both generators running concurrently."""
        plan = await asyncio.to_thread(self._plan, text, flashcard_count, mcq_count, difficulty, bloom_level, seed)
        flashcards, mcqs = await asyncio.gather(
            asyncio.to_thread(self._run_flashcards, plan),
            asyncio.to_thread(self._run_mcqs, plan),
        )
        return self._finish(plan, flashcards, mcqs)

    def _plan(self, text: str, flashcard_count: int, mcq_count: int,
              difficulty: Union[str, Difficulty], bloom_level: Union[str, BloomLevel],
              seed: Optional[int]) -> _GenerationPlan:
        started_at = time.time()
        flashcard_count = parse_count(flashcard_count, 'flashcard_count', self.settings.flashcard_max_count)
        mcq_count = parse_count(mcq_count, 'mcq_count', self.settings.mcq_max_count)
        difficulty = parse_enum(Difficulty, difficulty, 'difficulty')
        bloom_level = parse_enum(BloomLevel, bloom_level, 'bloom_level')
        if seed is None:
            seed = self.settings.default_seed

        concepts = self.extractor.extract(text)

        rng = random.Random(seed)
        return _GenerationPlan(
            text=text,
            concepts=concepts,
            flashcard_slice=concepts[:flashcard_count],
            mcq_slice=concepts[flashcard_count:flashcard_count + mcq_count],
            flashcard_count=flashcard_count,
            mcq_count=mcq_count,
            difficulty=difficulty,
            bloom_level=bloom_level,
            flashcard_rng=random.Random(rng.getrandbits(64)),
            mcq_rng=random.Random(rng.getrandbits(64)),
            seeded=seed is not None,
            started_at=started_at,
        )

    def _run_flashcards(self, plan: _GenerationPlan) -> List[FlashcardOutput]:
        generator = FlashcardGenerator(plan.flashcard_rng)
        return generator.generate(plan.flashcard_slice, plan.flashcard_count, plan.difficulty, plan.bloom_level)

    def _run_mcqs(self, plan: _GenerationPlan) -> List[MCQOutput]:
        generator = MCQGenerator(plan.mcq_rng)
        return generator.generate(plan.mcq_slice, plan.mcq_count, plan.difficulty, plan.bloom_level)

    def _finish(self, plan: _GenerationPlan, flashcards: List[FlashcardOutput], mcqs: List[MCQOutput]) -> EducationContent:
        duration_ms = int((time.time() - plan.started_at) * 1000)
        try:
            content = EducationContent(
                flashcards=flashcards,
                mcqs=mcqs,
                metadata=EducationContentMetadata(
                    source_text=_source_preview(plan.text),
                    source_length=len(plan.text),
                    difficulty=plan.difficulty,
                    bloom_level=plan.bloom_level,
                    flashcard_count=len(flashcards),
                    mcq_count=len(mcqs),
                    generated_at=datetime.now(timezone.utc).isoformat(),
                    processing_time_ms=duration_ms,
                    concepts_count=len(plan.concepts),
                ),
            )
        except ValidationError as e:
            LOG.exception('education_content_validation_failed', exc_info=True)
            raise GenerationError(f'Generated content does not match schema: {e}') from e

        log_content_generation(
            flashcard_count=len(flashcards),
            mcq_count=len(mcqs),
            concepts_count=len(plan.concepts),
            difficulty=plan.difficulty.value,
            bloom_level=plan.bloom_level.value,
            duration_ms=duration_ms,
            seeded=plan.seeded,
        )
        return content


# convenience
def generate_education_content(text: str, flashcard_count: int = 5, mcq_count: int = 3,
                               difficulty: Union[str, Difficulty] = Difficulty.BEGINNER,
                               bloom_level: Union[str, BloomLevel] = BloomLevel.REMEMBER,
                               seed: Optional[int] = None) -> Dict[str, Any]:
    content = ContentAssembler().assemble(text, flashcard_count, mcq_count, difficulty, bloom_level, seed=seed)
    return content.model_dump(mode='json')
