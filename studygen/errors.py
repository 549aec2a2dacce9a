"""Exception taxonomy shared by the extraction core and its callers."""


class StudyGenError(Exception):
    pass


class EmptyInputError(StudyGenError):
    """Source text is blank or whitespace-only."""
    pass


class NoConceptsExtractedError(StudyGenError):
    """Neither pattern extraction nor the sentence fallback produced a concept."""
    pass


class InvalidParameterError(StudyGenError):
    pass


class GenerationError(StudyGenError):
    """A generator produced an artifact that failed validation."""
    pass


class KnowledgeBaseError(StudyGenError):
    pass


class KnowledgeBaseNotFoundError(KnowledgeBaseError):
    pass
