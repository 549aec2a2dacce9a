from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .taxonomy import BloomLevel, Difficulty

MCQ_OPTION_COUNT = 4


def _unique_tags(tags: List[str]) -> List[str]:
    # tags behave as a set but keep first-seen order for stable JSON
    return list(dict.fromkeys(tags))


class FlashcardOutput(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    question: str = Field(min_length=1)
    answer: str
    difficulty: Difficulty
    bloom_level: BloomLevel
    category: str
    tags: List[str] = Field(default_factory=list)

    @field_validator('question')
    @classmethod
    def question_mark(cls, v: str) -> str:
        if not v.endswith('?'):
            raise ValueError('question must end with "?"')
        return v

    @field_validator('tags')
    @classmethod
    def dedupe_tags(cls, v: List[str]) -> List[str]:
        return _unique_tags(v)


class MCQOutput(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    question: str = Field(min_length=1)
    options: List[str]
    correct_answer_index: int = Field(ge=0, le=MCQ_OPTION_COUNT - 1)
    explanation: Optional[str] = None
    difficulty: Difficulty
    bloom_level: BloomLevel
    category: str
    tags: List[str] = Field(default_factory=list)

    @field_validator('question')
    @classmethod
    def question_mark(cls, v: str) -> str:
        if not v.endswith('?'):
            raise ValueError('question must end with "?"')
        return v

    @field_validator('options')
    @classmethod
    def four_distinct_options(cls, v: List[str]) -> List[str]:
        if len(v) != MCQ_OPTION_COUNT:
            raise ValueError(f'expected {MCQ_OPTION_COUNT} options, got {len(v)}')
        if len(set(v)) != len(v):
            raise ValueError('options must be distinct')
        return v

    @field_validator('tags')
    @classmethod
    def dedupe_tags(cls, v: List[str]) -> List[str]:
        return _unique_tags(v)

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_answer_index]


class EducationContentMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_text: str = ''
    source_length: int = Field(ge=0)
    difficulty: Difficulty
    bloom_level: BloomLevel
    flashcard_count: int = Field(ge=0)
    mcq_count: int = Field(ge=0)
    generated_at: str
    processing_time_ms: int = Field(ge=0)
    concepts_count: int = Field(ge=0)


class EducationContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    flashcards: List[FlashcardOutput]
    mcqs: List[MCQOutput]
    metadata: EducationContentMetadata

    @model_validator(mode='after')
    def counts_match(self) -> 'EducationContent':
        if self.metadata.flashcard_count != len(self.flashcards):
            raise ValueError('metadata.flashcard_count does not match flashcards')
        if self.metadata.mcq_count != len(self.mcqs):
            raise ValueError('metadata.mcq_count does not match mcqs')
        return self
