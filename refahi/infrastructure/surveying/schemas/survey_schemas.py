"""Pydantic schemas for survey API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from refahi.domain.surveying.entities.survey import (
    MAX_CHOICE_OPTIONS,
    MAX_TITLE_LENGTH,
    Question,
    Survey,
)
from refahi.domain.surveying.entities.survey_response import SurveyResponse
from refahi.domain.surveying.enums import QuestionKind, ResponseStatus, SurveyState
from refahi.infrastructure.common.schemas import SuccessResponse


class CreateSurveyRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str | None = None
    start_at: datetime | None = None
    end_at: datetime | None = None
    is_anonymous: bool = False
    max_attempts_per_member: int = Field(1, gt=0)
    allow_multiple_submissions: bool = False
    cool_down_seconds: int | None = Field(None, ge=0)


class AddQuestionRequest(BaseModel):
    kind: QuestionKind
    text: str = Field(..., min_length=1)
    is_required: bool = True
    options: list[str] = Field(default_factory=list, max_length=MAX_CHOICE_OPTIONS)


class AnswerRequest(BaseModel):
    question_id: int
    text_answer: str | None = None
    selected_option_ids: list[int] = Field(default_factory=list)


class OptionSchema(BaseModel):
    id: int
    text: str
    order: int


class QuestionSchema(BaseModel):
    id: int
    kind: QuestionKind
    text: str
    order: int
    is_required: bool
    options: list[OptionSchema]

    @classmethod
    def from_domain(cls, question: Question) -> "QuestionSchema":
        return cls(
            id=question.id.value,
            kind=question.kind,
            text=question.text,
            order=question.order,
            is_required=question.is_required,
            options=[
                OptionSchema(id=o.id.value, text=o.text, order=o.order)
                for o in sorted(question.options, key=lambda o: o.order)
            ],
        )


class SurveySummarySchema(BaseModel):
    id: int
    title: str
    description: str | None
    state: SurveyState
    start_at: datetime | None
    end_at: datetime | None
    is_anonymous: bool
    max_attempts_per_member: int
    allow_multiple_submissions: bool
    cool_down_seconds: int | None
    question_count: int

    @classmethod
    def from_domain(cls, survey: Survey) -> "SurveySummarySchema":
        return cls(
            id=survey.id.value,
            title=survey.title,
            description=survey.description,
            state=survey.state,
            start_at=survey.start_at,
            end_at=survey.end_at,
            is_anonymous=survey.is_anonymous,
            max_attempts_per_member=survey.policy.max_attempts_per_member,
            allow_multiple_submissions=survey.policy.allow_multiple_submissions,
            cool_down_seconds=survey.policy.cool_down_seconds,
            question_count=len(survey.questions),
        )


class SurveyDetailSchema(SurveySummarySchema):
    questions: list[QuestionSchema]

    @classmethod
    def from_domain(cls, survey: Survey) -> "SurveyDetailSchema":
        summary = SurveySummarySchema.from_domain(survey)
        return cls(
            **summary.model_dump(),
            questions=[QuestionSchema.from_domain(q) for q in survey.ordered_questions],
        )


class AnswerSchema(BaseModel):
    question_id: int
    text_answer: str | None
    selected_option_ids: list[int]


class SurveyResponseSchema(BaseModel):
    id: int
    survey_id: int
    attempt_number: int
    status: ResponseStatus
    started_at: datetime | None
    submitted_at: datetime | None
    cancelled_at: datetime | None
    answers: list[AnswerSchema]

    @classmethod
    def from_domain(cls, response: SurveyResponse) -> "SurveyResponseSchema":
        return cls(
            id=response.id.value,
            survey_id=response.survey_id.value,
            attempt_number=response.attempt_number,
            status=response.status,
            started_at=response.started_at,
            submitted_at=response.submitted_at,
            cancelled_at=response.cancelled_at,
            answers=[
                AnswerSchema(
                    question_id=a.question_id.value,
                    text_answer=a.text_answer,
                    selected_option_ids=[i.value for i in a.selected_option_ids],
                )
                for a in response.answers
            ],
        )


class SurveyActionResponse(SuccessResponse):
    survey: SurveyDetailSchema


class ResponseActionResponse(SuccessResponse):
    response: SurveyResponseSchema
