"""
Normalization of ingested documents into a single typed text value.

Upstream ingestion (PDF/DOCX/OCR extraction) hands over records of varying
shape. Everything is validated and cleaned here into an ``ExtractedText`` so
the generation core only ever receives a plain string.

Accepted inputs:
- a plain string
- a mapping shaped like an upload result (``filename``, ``content``, ``type``,
  ``size``, ``extractedAt``/``extracted_at``)
- an ``ExtractedText`` instance
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from studygen.errors import InvalidParameterError
from studygen.utils import get_logger

LOG = get_logger()


class SourceType(str, Enum):
    PDF = 'pdf'
    DOCX = 'docx'
    IMAGE = 'image'
    TEXT = 'text'


class ExtractedText(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str
    filename: Optional[str] = None
    source_type: SourceType = SourceType.TEXT
    size: int = Field(0, ge=0)
    extracted_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


def clean_text(text: str) -> str:
    """
    Clean and normalize extracted text while keeping paragraph breaks.

    - Normalizes line endings (\\r\\n, \\r → \\n)
    - Decodes the common HTML entities left behind by extractors
    - Removes control characters (except newline and tab)
    - Collapses runs of spaces/tabs and strips trailing whitespace per line
    - Collapses 3+ newlines to 2 (paragraph boundary)

    Raises:
        InvalidParameterError: If text is not a string
    """
    if not isinstance(text, str):
        raise InvalidParameterError('Input text must be a string, not None or other type')

    text = text.replace('\r\n', '\n').replace('\r', '\n')

    text = text.replace('&nbsp;', ' ')
    text = text.replace('&lt;', '<')
    text = text.replace('&gt;', '>')
    text = text.replace('&quot;', '"')
    text = text.replace('&amp;', '&')

    text = ''.join(char for char in text if ord(char) >= 32 or char in '\n\t')

    text = re.sub(r'[ \t]+', ' ', text)
    text = '\n'.join(line.strip() for line in text.split('\n'))
    text = re.sub(r'\n{3,}', '\n\n', text)

    return text.strip()


def normalize_extracted_text(record: Union[str, Mapping[str, Any], ExtractedText]) -> ExtractedText:
    """Validate an ingestion record and return a cleaned ``ExtractedText``.

    Raises:
        InvalidParameterError: If the record has an unsupported shape or invalid fields
    """
    if isinstance(record, ExtractedText):
        return record.model_copy(update={'content': clean_text(record.content)})

    if isinstance(record, str):
        content = clean_text(record)
        return ExtractedText(content=content, size=len(record.encode('utf-8')))

    if not isinstance(record, Mapping):
        raise InvalidParameterError(f'Unsupported extracted text record: {type(record).__name__}')

    if 'content' not in record:
        raise InvalidParameterError('Extracted text record is missing "content"')

    raw_content = record['content']
    content = clean_text(raw_content)
    fields = {
        'content': content,
        'filename': record.get('filename'),
        'source_type': str(record.get('type') or record.get('source_type') or SourceType.TEXT.value).lower(),
        'size': record.get('size') if record.get('size') is not None else len(raw_content.encode('utf-8')),
    }
    extracted_at = record.get('extractedAt') or record.get('extracted_at')
    if extracted_at:
        fields['extracted_at'] = str(extracted_at)

    try:
        extracted = ExtractedText(**fields)
    except ValidationError as e:
        raise InvalidParameterError(f'Invalid extracted text record: {e}') from e

    LOG.debug('extracted_text_normalized', extra={'source_type': extracted.source_type.value, 'length': len(content)})
    return extracted
