"""Survey aggregate with its questions."""

from dataclasses import dataclass, field
from datetime import datetime

from refahi.domain.common.aggregate_root import AggregateRoot
from refahi.domain.common.entity import Entity
from refahi.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from refahi.domain.common.value_objects import QuestionId, QuestionOptionId, SurveyId
from refahi.domain.surveying.enums import QuestionKind, SurveyState
from refahi.domain.surveying.participation_policy import ParticipationPolicy

MAX_TITLE_LENGTH = 200
MIN_CHOICE_OPTIONS = 2
MAX_CHOICE_OPTIONS = 25
FIXED_MCQ_OPTIONS = 4


@dataclass
class QuestionOption(Entity[QuestionOptionId]):
    id: QuestionOptionId
    text: str
    order: int


@dataclass
class Question(Entity[QuestionId]):
    """
    A question of a survey.

    Business Rules:
    - Text is required
    - Textual questions have no options
    - Choice questions have MIN_CHOICE_OPTIONS..MAX_CHOICE_OPTIONS options
    - FixedMCQ4 questions have exactly FIXED_MCQ_OPTIONS options
    """

    id: QuestionId
    kind: QuestionKind
    text: str
    order: int
    is_required: bool = True
    options: list[QuestionOption] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.text or not self.text.strip():
            raise ValidationError("Question text cannot be empty", field="text")
        count = len(self.options)
        if self.kind == QuestionKind.TEXTUAL and count:
            raise ValidationError("Textual questions cannot have options", field="options")
        if self.kind == QuestionKind.FIXED_MCQ4 and count != FIXED_MCQ_OPTIONS:
            raise ValidationError(
                f"FixedMCQ4 questions need exactly {FIXED_MCQ_OPTIONS} options", field="options"
            )
        if self.kind in (QuestionKind.CHOICE_SINGLE, QuestionKind.CHOICE_MULTI) and not (
            MIN_CHOICE_OPTIONS <= count <= MAX_CHOICE_OPTIONS
        ):
            raise ValidationError(
                f"Choice questions need between {MIN_CHOICE_OPTIONS} "
                f"and {MAX_CHOICE_OPTIONS} options",
                field="options",
            )
        if any(not option.text or not option.text.strip() for option in self.options):
            raise ValidationError("Option text cannot be empty", field="options")

    @property
    def option_ids(self) -> set[QuestionOptionId]:
        return {option.id for option in self.options}


@dataclass
class Survey(AggregateRoot[SurveyId]):
    """
    A survey members answer while it is active.

    Business Rules:
    - Title is required
    - start_at is not after end_at
    - Questions can only be added while in Draft
    - An active survey has at least one question
    - Draft -> Active -> Closed -> Archived
    """

    id: SurveyId
    title: str
    description: str | None = None
    state: SurveyState = SurveyState.DRAFT
    start_at: datetime | None = None
    end_at: datetime | None = None
    is_anonymous: bool = False
    policy: ParticipationPolicy = field(default_factory=ParticipationPolicy)
    questions: list[Question] = field(default_factory=list)
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.title or not self.title.strip():
            raise ValidationError("Survey title cannot be empty", field="title")
        if len(self.title) > MAX_TITLE_LENGTH:
            raise ValidationError(
                f"Survey title cannot exceed {MAX_TITLE_LENGTH} characters", field="title"
            )
        if self.start_at and self.end_at and self.start_at > self.end_at:
            raise ValidationError("Survey start cannot be after its end", field="start_at")

    @property
    def ordered_questions(self) -> list[Question]:
        return sorted(self.questions, key=lambda q: q.order)

    @property
    def required_question_ids(self) -> set[QuestionId]:
        return {q.id for q in self.questions if q.is_required}

    def get_question(self, question_id: QuestionId) -> Question | None:
        return next((q for q in self.questions if q.id == question_id), None)

    def add_question(
        self,
        kind: QuestionKind,
        text: str,
        is_required: bool = True,
        options: list[str] | None = None,
    ) -> Question:
        if self.state != SurveyState.DRAFT:
            raise BusinessRuleViolationError(
                "questions_only_in_draft", "Questions can only be added to a draft survey"
            )
        question = Question(
            id=QuestionId.generate(),
            kind=kind,
            text=text.strip(),
            order=len(self.questions) + 1,
            is_required=is_required,
            options=[
                QuestionOption(id=QuestionOptionId.generate(), text=value.strip(), order=index)
                for index, value in enumerate(options or [], start=1)
            ],
        )
        self.questions.append(question)
        return question

    def activate(self, now: datetime) -> None:
        if self.state != SurveyState.DRAFT:
            raise BusinessRuleViolationError(
                "activate_requires_draft", "Only draft surveys can be activated"
            )
        if self.start_at and now < self.start_at:
            raise BusinessRuleViolationError(
                "activate_before_start", "Survey cannot be activated before its start time"
            )
        if self.end_at and now >= self.end_at:
            raise BusinessRuleViolationError(
                "activate_after_end", "Survey cannot be activated after its end time"
            )
        if not self.questions:
            raise BusinessRuleViolationError(
                "activate_requires_questions", "Survey needs at least one question"
            )
        self.state = SurveyState.ACTIVE

    def close(self) -> None:
        if self.state != SurveyState.ACTIVE:
            raise BusinessRuleViolationError(
                "close_requires_active", "Only active surveys can be closed"
            )
        self.state = SurveyState.CLOSED

    def archive(self) -> None:
        if self.state != SurveyState.CLOSED:
            raise BusinessRuleViolationError(
                "archive_requires_closed", "Only closed surveys can be archived"
            )
        self.state = SurveyState.ARCHIVED

    def is_accepting_responses(self, now: datetime) -> bool:
        if self.state != SurveyState.ACTIVE:
            return False
        if self.start_at and now < self.start_at:
            return False
        return not (self.end_at and now > self.end_at)

    @classmethod
    def create(
        cls,
        title: str,
        description: str | None = None,
        start_at: datetime | None = None,
        end_at: datetime | None = None,
        is_anonymous: bool = False,
        policy: ParticipationPolicy | None = None,
    ) -> "Survey":
        """Create a new draft survey (ID will be 0 until persisted)."""
        return cls(
            id=SurveyId.generate(),
            title=title.strip(),
            description=description,
            start_at=start_at,
            end_at=end_at,
            is_anonymous=is_anonymous,
            policy=policy or ParticipationPolicy(),
        )
