"""A member's attempt at answering a survey."""

from dataclasses import dataclass, field
from datetime import datetime

from refahi.domain.common.aggregate_root import AggregateRoot
from refahi.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from refahi.domain.common.value_object import ValueObject
from refahi.domain.common.value_objects import (
    NationalId,
    QuestionId,
    QuestionOptionId,
    SurveyId,
    SurveyResponseId,
)
from refahi.domain.surveying.entities.survey import Question
from refahi.domain.surveying.enums import SINGLE_CHOICE_KINDS, QuestionKind, ResponseStatus


@dataclass(frozen=True)
class QuestionAnswer(ValueObject):
    question_id: QuestionId
    text_answer: str | None = None
    selected_option_ids: tuple[QuestionOptionId, ...] = ()


@dataclass
class SurveyResponse(AggregateRoot[SurveyResponseId]):
    """
    One attempt of a participant at a survey.

    Business Rules:
    - Answers can only change while the attempt is Active
    - Selected options must belong to the question
    - Single-choice questions accept at most one option
    - Textual answers cannot be blank
    - Submission requires every required question to be answered
    """

    id: SurveyResponseId
    survey_id: SurveyId
    participant_national_code: NationalId
    attempt_number: int
    status: ResponseStatus = ResponseStatus.ACTIVE
    answers: list[QuestionAnswer] = field(default_factory=list)
    started_at: datetime | None = None
    submitted_at: datetime | None = None
    cancelled_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.attempt_number < 1:
            raise ValidationError("Attempt number must be at least 1", field="attempt_number")

    @property
    def finished_at(self) -> datetime | None:
        return self.submitted_at or self.cancelled_at

    def get_answer(self, question_id: QuestionId) -> QuestionAnswer | None:
        return next((a for a in self.answers if a.question_id == question_id), None)

    def _ensure_active(self) -> None:
        if self.status != ResponseStatus.ACTIVE:
            raise BusinessRuleViolationError(
                "response_active", f"Response in status {self.status} cannot be changed"
            )

    def set_answer(
        self,
        question: Question,
        text_answer: str | None = None,
        selected_option_ids: list[QuestionOptionId] | None = None,
    ) -> QuestionAnswer:
        """Record or replace the answer to ``question``."""
        self._ensure_active()
        selected = tuple(dict.fromkeys(selected_option_ids or []))

        if question.kind == QuestionKind.TEXTUAL:
            if not text_answer or not text_answer.strip():
                raise ValidationError("Answer text cannot be empty", field="text_answer")
            if selected:
                raise ValidationError(
                    "Textual questions do not take options", field="selected_option_ids"
                )
        else:
            if not selected:
                raise ValidationError(
                    "At least one option must be selected", field="selected_option_ids"
                )
            unknown = set(selected) - question.option_ids
            if unknown:
                raise ValidationError(
                    "Selected options do not belong to the question",
                    field="selected_option_ids",
                    value=sorted(option.value for option in unknown),
                )
            if question.kind in SINGLE_CHOICE_KINDS and len(selected) > 1:
                raise ValidationError(
                    "Only one option can be selected", field="selected_option_ids"
                )

        answer = QuestionAnswer(
            question_id=question.id,
            text_answer=text_answer.strip() if text_answer else None,
            selected_option_ids=selected,
        )
        self.answers = [a for a in self.answers if a.question_id != question.id]
        self.answers.append(answer)
        return answer

    def submit(self, required_question_ids: set[QuestionId], now: datetime) -> None:
        self._ensure_active()
        answered = {answer.question_id for answer in self.answers}
        missing = required_question_ids - answered
        if missing:
            raise BusinessRuleViolationError(
                "required_questions_answered",
                f"{len(missing)} required question(s) are not answered",
            )
        self.status = ResponseStatus.SUBMITTED
        self.submitted_at = now

    def cancel(self, now: datetime) -> None:
        self._ensure_active()
        self.status = ResponseStatus.CANCELLED
        self.cancelled_at = now

    @classmethod
    def start(
        cls,
        survey_id: SurveyId,
        participant_national_code: NationalId,
        attempt_number: int,
        now: datetime,
    ) -> "SurveyResponse":
        """Create a new active attempt (ID will be 0 until persisted)."""
        return cls(
            id=SurveyResponseId.generate(),
            survey_id=survey_id,
            participant_national_code=participant_national_code,
            attempt_number=attempt_number,
            started_at=now,
        )
