"""
Concept extraction: rule-based clause classification and importance ranking.
"""
from .models import Concept
from .rules import CLASSIFICATION_RULES, ClassificationRule, classify, count_cues
from .scoring import PRIMARY_BAND, FALLBACK_BAND, score_importance
from .extractor import ConceptExtractor, extract_concepts, coerce_concepts

__all__ = [
	'Concept',
	'CLASSIFICATION_RULES', 'ClassificationRule', 'classify', 'count_cues',
	'PRIMARY_BAND', 'FALLBACK_BAND', 'score_importance',
	'ConceptExtractor', 'extract_concepts', 'coerce_concepts',
]
