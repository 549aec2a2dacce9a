from dataclasses import dataclass

from studygen.taxonomy import ConceptType


@dataclass(frozen=True)
class Concept:
    """A classified clause or sentence pulled out of the source text.

    Attributes:
        id: Stable identifier within one extraction (``concept-<n>``)
        text: The clause itself, whitespace-trimmed
        type: Classification assigned by the first matching rule
        source_excerpt: Leading slice of the paragraph the clause came from
        importance: Ranking score in [0, 1)
    """
    id: str
    text: str
    type: ConceptType
    source_excerpt: str
    importance: float

    def __post_init__(self):
        if not self.text or not self.text.strip():
            raise ValueError('Concept text must be non-empty')
        if not (0.0 <= self.importance < 1.0):
            raise ValueError(f'Importance must be in [0, 1), got {self.importance}')
