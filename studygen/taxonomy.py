from enum import Enum
from typing import Any, Optional, Type, TypeVar, Union

from .errors import InvalidParameterError


class ConceptType(str, Enum):
    DEFINITION = 'definition'
    FACT = 'fact'
    PROCESS = 'process'
    CAUSE_EFFECT = 'cause-effect'
    GENERAL = 'general'


class Difficulty(str, Enum):
    BEGINNER = 'beginner'
    INTERMEDIATE = 'intermediate'
    ADVANCED = 'advanced'


class BloomLevel(str, Enum):
    REMEMBER = 'remember'
    UNDERSTAND = 'understand'
    APPLY = 'apply'
    ANALYZE = 'analyze'
    EVALUATE = 'evaluate'
    CREATE = 'create'


class QuestionKind(str, Enum):
    FLASHCARD = 'flashcard'
    MCQ = 'mcq'


CATEGORY_BY_TYPE = {
    ConceptType.DEFINITION: 'Definitions',
    ConceptType.FACT: 'Key Facts',
    ConceptType.PROCESS: 'Processes',
}
DEFAULT_CATEGORY = 'Concepts'

E = TypeVar('E', bound=Enum)


def parse_enum(enum_cls: Type[E], value: Union[str, E], field: str) -> E:
    """Coerce a raw string (case-insensitive) or enum member into ``enum_cls``."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    allowed = '|'.join(m.value for m in enum_cls)
    raise InvalidParameterError(f'{field} must be one of {allowed}, got {value!r}')


def category_for(concept_type: ConceptType) -> str:
    return CATEGORY_BY_TYPE.get(concept_type, DEFAULT_CATEGORY)


def parse_count(value: Any, field: str, maximum: Optional[int] = None) -> int:
    """Require an int count (bools rejected), bounded to ``0..maximum`` when given."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(f'{field} must be an integer, got {value!r}')
    if maximum is not None and (value < 0 or value > maximum):
        raise InvalidParameterError(f'{field} must be 0-{maximum}, got {value}')
    return value
