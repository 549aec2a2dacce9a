"""
Content assembly: extraction, disjoint allocation, generation and metadata.
"""
from .assembler import ContentAssembler, generate_education_content, SOURCE_PREVIEW_CHARS

__all__ = ['ContentAssembler', 'generate_education_content', 'SOURCE_PREVIEW_CHARS']
