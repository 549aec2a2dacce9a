"""
Question synthesis driven by Bloom's taxonomy starter phrases.
"""
from .templates import (
	BLOOM_STARTERS,
	TYPE_STARTERS,
	QuestionTemplateEngine,
	question_subject,
	starters_for,
)

__all__ = [
	'BLOOM_STARTERS',
	'TYPE_STARTERS',
	'QuestionTemplateEngine',
	'question_subject',
	'starters_for',
]
