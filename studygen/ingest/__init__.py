"""Boundary types for text handed over by the ingestion collaborator"""

from .extracted_text import ExtractedText, SourceType, clean_text, normalize_extracted_text

__all__ = ['ExtractedText', 'SourceType', 'clean_text', 'normalize_extracted_text']
