"""Caller-side repository for stored source material"""

from .repository import InMemoryKnowledgeBase, KnowledgeBaseEntry, KnowledgeBaseRepository

__all__ = ['InMemoryKnowledgeBase', 'KnowledgeBaseEntry', 'KnowledgeBaseRepository']
