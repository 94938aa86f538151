"""Mappers for Survey and SurveyResponse ORM ↔ Domain conversion."""

from refahi.domain.common.value_objects import (
    NationalId,
    QuestionId,
    QuestionOptionId,
    SurveyId,
    SurveyResponseId,
)
from refahi.domain.surveying.entities.survey import Question, QuestionOption, Survey
from refahi.domain.surveying.entities.survey_response import QuestionAnswer, SurveyResponse
from refahi.domain.surveying.enums import QuestionKind, ResponseStatus, SurveyState
from refahi.domain.surveying.participation_policy import ParticipationPolicy
from refahi.infrastructure.common.collections import sync_collection
from refahi.models import QuestionOption as QuestionOptionORM
from refahi.models import ResponseAnswer as ResponseAnswerORM
from refahi.models import Survey as SurveyORM
from refahi.models import SurveyQuestion as SurveyQuestionORM
from refahi.models import SurveyResponse as SurveyResponseORM
from refahi.utils import ensure_utc_or_none


class SurveyMapper:
    """Maps a survey together with its questions and options."""

    def to_domain(self, orm_model: SurveyORM) -> Survey:
        return Survey(
            id=SurveyId(orm_model.id),
            title=orm_model.title,
            description=orm_model.description,
            state=SurveyState(orm_model.state),
            start_at=ensure_utc_or_none(orm_model.start_at),
            end_at=ensure_utc_or_none(orm_model.end_at),
            is_anonymous=orm_model.is_anonymous,
            policy=ParticipationPolicy(
                max_attempts_per_member=orm_model.max_attempts_per_member,
                allow_multiple_submissions=orm_model.allow_multiple_submissions,
                cool_down_seconds=orm_model.cool_down_seconds,
            ),
            questions=[
                Question(
                    id=QuestionId(question.id),
                    kind=QuestionKind(question.kind),
                    text=question.text,
                    order=question.display_order,
                    is_required=question.is_required,
                    options=[
                        QuestionOption(
                            id=QuestionOptionId(option.id),
                            text=option.text,
                            order=option.display_order,
                        )
                        for option in question.options
                    ],
                )
                for question in orm_model.questions
            ],
            created_at=ensure_utc_or_none(orm_model.created_at),
        )

    def to_orm(self, domain_entity: Survey, orm_model: SurveyORM | None = None) -> SurveyORM:
        orm_model = orm_model or SurveyORM()
        orm_model.title = domain_entity.title
        orm_model.description = domain_entity.description
        orm_model.state = domain_entity.state.value
        orm_model.start_at = domain_entity.start_at
        orm_model.end_at = domain_entity.end_at
        orm_model.is_anonymous = domain_entity.is_anonymous
        orm_model.max_attempts_per_member = domain_entity.policy.max_attempts_per_member
        orm_model.allow_multiple_submissions = domain_entity.policy.allow_multiple_submissions
        orm_model.cool_down_seconds = domain_entity.policy.cool_down_seconds
        orm_model.questions = sync_collection(
            orm_model.questions,
            domain_entity.questions,
            lambda _: SurveyQuestionORM(),
            self._update_question,
        )
        return orm_model

    @staticmethod
    def _update_option(option: QuestionOption, orm_model: QuestionOptionORM) -> None:
        orm_model.text = option.text
        orm_model.display_order = option.order

    def _update_question(self, question: Question, orm_model: SurveyQuestionORM) -> None:
        orm_model.kind = question.kind.value
        orm_model.text = question.text
        orm_model.display_order = question.order
        orm_model.is_required = question.is_required
        orm_model.options = sync_collection(
            orm_model.options,
            question.options,
            lambda _: QuestionOptionORM(),
            self._update_option,
        )


class SurveyResponseMapper:
    def to_domain(self, orm_model: SurveyResponseORM) -> SurveyResponse:
        return SurveyResponse(
            id=SurveyResponseId(orm_model.id),
            survey_id=SurveyId(orm_model.survey_id),
            participant_national_code=NationalId(orm_model.participant_national_code),
            attempt_number=orm_model.attempt_number,
            status=ResponseStatus(orm_model.status),
            answers=[
                QuestionAnswer(
                    question_id=QuestionId(answer.question_id),
                    text_answer=answer.text_answer,
                    selected_option_ids=tuple(
                        QuestionOptionId(i) for i in answer.selected_option_ids or []
                    ),
                )
                for answer in orm_model.answers
            ],
            started_at=ensure_utc_or_none(orm_model.started_at),
            submitted_at=ensure_utc_or_none(orm_model.submitted_at),
            cancelled_at=ensure_utc_or_none(orm_model.cancelled_at),
        )

    def to_orm(
        self, domain_entity: SurveyResponse, orm_model: SurveyResponseORM | None = None
    ) -> SurveyResponseORM:
        orm_model = orm_model or SurveyResponseORM(
            survey_id=domain_entity.survey_id.value,
            participant_national_code=domain_entity.participant_national_code.value,
            attempt_number=domain_entity.attempt_number,
        )
        orm_model.status = domain_entity.status.value
        orm_model.started_at = domain_entity.started_at
        orm_model.submitted_at = domain_entity.submitted_at
        orm_model.cancelled_at = domain_entity.cancelled_at

        # Answers are keyed by question
        by_question = {row.question_id: row for row in orm_model.answers}
        rows = []
        for answer in domain_entity.answers:
            row = by_question.get(answer.question_id.value) or ResponseAnswerORM(
                question_id=answer.question_id.value
            )
            row.text_answer = answer.text_answer
            row.selected_option_ids = [i.value for i in answer.selected_option_ids]
            rows.append(row)
        orm_model.answers = rows
        return orm_model
