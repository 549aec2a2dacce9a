"""
Flashcard generation from ranked concepts using Bloom's-taxonomy templates.
"""

from .generator import (
	FlashcardGenerator,
	generate_flashcards,
	ANSWER_MAX_CHARS,
	AUTO_GENERATED_TAG,
)

__all__ = [
	'FlashcardGenerator',
	'generate_flashcards',
	'ANSWER_MAX_CHARS',
	'AUTO_GENERATED_TAG',
]
