"""
Multiple-choice question generation with templated distractors.
"""
from .distractors import synthesize_distractors, lead_words, DISTRACTOR_TEMPLATES
from .mcq_generator import MCQGenerator, generate_mcqs, shuffle_options, OPTION_MAX_CHARS

__all__ = [
	'MCQGenerator', 'generate_mcqs', 'shuffle_options', 'OPTION_MAX_CHARS',
	'synthesize_distractors', 'lead_words', 'DISTRACTOR_TEMPLATES',
]
