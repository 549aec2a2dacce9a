import threading
import time
import uuid
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from studygen.errors import KnowledgeBaseNotFoundError
from studygen.ingest import ExtractedText
from studygen.utils import get_logger

LOG = get_logger()


class KnowledgeBaseEntry(BaseModel):
    id: str
    title: str
    source: ExtractedText
    created_at: int = Field(default_factory=lambda: int(time.time()))


class KnowledgeBaseRepository(ABC):
    """Storage for source material the caller layer keeps between requests.

    The generation core never touches a repository; callers load the text and
    pass it to the assembler.
    """

    @abstractmethod
    def save(self, source: ExtractedText, title: Optional[str] = None) -> KnowledgeBaseEntry:
        ...

    @abstractmethod
    def load(self, entry_id: str) -> KnowledgeBaseEntry:
        ...

    @abstractmethod
    def list(self) -> List[KnowledgeBaseEntry]:
        ...

    @abstractmethod
    def delete(self, entry_id: str) -> None:
        ...


class InMemoryKnowledgeBase(KnowledgeBaseRepository):
    _instance = None
    _instance_lock = threading.Lock()

    def __init__(self):
        self._entries: Dict[str, KnowledgeBaseEntry] = {}
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> 'InMemoryKnowledgeBase':
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = InMemoryKnowledgeBase()
        return cls._instance

    def save(self, source: ExtractedText, title: Optional[str] = None) -> KnowledgeBaseEntry:
        entry = KnowledgeBaseEntry(
            id=uuid.uuid4().hex,
            title=title or source.filename or 'Untitled',
            source=source,
        )
        with self._lock:
            self._entries[entry.id] = entry
        LOG.info('knowledge_base_saved', extra={'entry_id': entry.id, 'length': len(source.content)})
        return entry

    def load(self, entry_id: str) -> KnowledgeBaseEntry:
        with self._lock:
            entry = self._entries.get(entry_id)
        if entry is None:
            raise KnowledgeBaseNotFoundError(f'Knowledge base entry not found: {entry_id}')
        return entry

    def list(self) -> List[KnowledgeBaseEntry]:
        with self._lock:
            entries = list(self._entries.values())
        return sorted(entries, key=lambda e: e.created_at)

    def delete(self, entry_id: str) -> None:
        with self._lock:
            removed = self._entries.pop(entry_id, None)
        if removed is None:
            raise KnowledgeBaseNotFoundError(f'Knowledge base entry not found: {entry_id}')
        LOG.info('knowledge_base_deleted', extra={'entry_id': entry_id})
