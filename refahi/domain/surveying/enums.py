"""States and categories used by the surveying module."""

from enum import StrEnum


class SurveyState(StrEnum):
    DRAFT = "Draft"
    ACTIVE = "Active"
    CLOSED = "Closed"
    ARCHIVED = "Archived"


class QuestionKind(StrEnum):
    TEXTUAL = "Textual"
    CHOICE_SINGLE = "ChoiceSingle"
    CHOICE_MULTI = "ChoiceMulti"
    FIXED_MCQ4 = "FixedMCQ4"


class ResponseStatus(StrEnum):
    ACTIVE = "Active"
    SUBMITTED = "Submitted"
    CANCELLED = "Cancelled"


SINGLE_CHOICE_KINDS = frozenset({QuestionKind.CHOICE_SINGLE, QuestionKind.FIXED_MCQ4})
