"""Utility subpackage for studygen modules"""

from .logger import (
	get_logger,
	log_request,
	log_error,
	log_concept_extraction,
	log_content_generation,
	set_request_context,
	get_request_context,
)
from .ids import generate_id

__all__ = [
	'get_logger',
	'log_request',
	'log_error',
	'log_concept_extraction',
	'log_content_generation',
	'set_request_context',
	'get_request_context',
	'generate_id',
]
