"""Offline flashcard and multiple-choice question generation from study text"""

from .content import ContentAssembler, generate_education_content
from .errors import (
	StudyGenError,
	EmptyInputError,
	NoConceptsExtractedError,
	InvalidParameterError,
	GenerationError,
	KnowledgeBaseError,
	KnowledgeBaseNotFoundError,
)
from .models import EducationContent, EducationContentMetadata, FlashcardOutput, MCQOutput
from .taxonomy import BloomLevel, ConceptType, Difficulty, QuestionKind

__version__ = '1.0.0'

__all__ = [
	'ContentAssembler',
	'generate_education_content',
	'StudyGenError',
	'EmptyInputError',
	'NoConceptsExtractedError',
	'InvalidParameterError',
	'GenerationError',
	'KnowledgeBaseError',
	'KnowledgeBaseNotFoundError',
	'EducationContent',
	'EducationContentMetadata',
	'FlashcardOutput',
	'MCQOutput',
	'BloomLevel',
	'ConceptType',
	'Difficulty',
	'QuestionKind',
]
