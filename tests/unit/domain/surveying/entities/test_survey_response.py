"""Tests for answering and submitting a survey attempt."""

from datetime import UTC, datetime

import pytest

from refahi.domain.common.exceptions import BusinessRuleViolationError, ValidationError
from refahi.domain.common.value_objects import (
    NationalId,
    QuestionId,
    QuestionOptionId,
    SurveyId,
)
from refahi.domain.surveying.entities.survey import Question, QuestionOption
from refahi.domain.surveying.entities.survey_response import SurveyResponse
from refahi.domain.surveying.enums import QuestionKind, ResponseStatus

NOW = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)


def _choice(question_id: int, kind: QuestionKind, option_ids: list[int]) -> Question:
    return Question(
        id=QuestionId(question_id),
        kind=kind,
        text=f"Question {question_id}",
        order=question_id,
        options=[
            QuestionOption(id=QuestionOptionId(oid), text=f"Option {oid}", order=i + 1)
            for i, oid in enumerate(option_ids)
        ],
    )


SINGLE = _choice(1, QuestionKind.CHOICE_SINGLE, [11, 12])
MULTI = _choice(2, QuestionKind.CHOICE_MULTI, [21, 22, 23])
TEXT = Question(id=QuestionId(3), kind=QuestionKind.TEXTUAL, text="Comments", order=3)


@pytest.fixture
def response() -> SurveyResponse:
    return SurveyResponse.start(SurveyId(1), NationalId("1234567891"), 1, NOW)


def test_attempt_number_starts_at_one() -> None:
    with pytest.raises(ValidationError):
        SurveyResponse.start(SurveyId(1), NationalId("1234567891"), 0, NOW)


class TestSetAnswer:
    def test_single_choice(self, response: SurveyResponse) -> None:
        answer = response.set_answer(SINGLE, selected_option_ids=[QuestionOptionId(12)])
        assert answer.selected_option_ids == (QuestionOptionId(12),)

    def test_single_choice_rejects_two_options(self, response: SurveyResponse) -> None:
        with pytest.raises(ValidationError):
            response.set_answer(
                SINGLE, selected_option_ids=[QuestionOptionId(11), QuestionOptionId(12)]
            )

    def test_duplicates_are_collapsed(self, response: SurveyResponse) -> None:
        answer = response.set_answer(
            SINGLE, selected_option_ids=[QuestionOptionId(11), QuestionOptionId(11)]
        )
        assert answer.selected_option_ids == (QuestionOptionId(11),)

    def test_multi_choice(self, response: SurveyResponse) -> None:
        answer = response.set_answer(
            MULTI, selected_option_ids=[QuestionOptionId(21), QuestionOptionId(23)]
        )
        assert len(answer.selected_option_ids) == 2

    def test_option_must_belong_to_question(self, response: SurveyResponse) -> None:
        with pytest.raises(ValidationError):
            response.set_answer(MULTI, selected_option_ids=[QuestionOptionId(11)])

    def test_choice_needs_an_option(self, response: SurveyResponse) -> None:
        with pytest.raises(ValidationError):
            response.set_answer(SINGLE, selected_option_ids=[])

    def test_textual(self, response: SurveyResponse) -> None:
        assert response.set_answer(TEXT, text_answer="  Great  ").text_answer == "Great"
        with pytest.raises(ValidationError):
            response.set_answer(TEXT, text_answer="   ")
        with pytest.raises(ValidationError):
            response.set_answer(TEXT, text_answer="x", selected_option_ids=[QuestionOptionId(11)])

    def test_new_answer_replaces_previous(self, response: SurveyResponse) -> None:
        response.set_answer(SINGLE, selected_option_ids=[QuestionOptionId(11)])
        response.set_answer(SINGLE, selected_option_ids=[QuestionOptionId(12)])

        assert len(response.answers) == 1
        answer = response.get_answer(SINGLE.id)
        assert answer is not None
        assert answer.selected_option_ids == (QuestionOptionId(12),)


class TestLifecycle:
    def test_submit_requires_required_answers(self, response: SurveyResponse) -> None:
        response.set_answer(SINGLE, selected_option_ids=[QuestionOptionId(11)])

        with pytest.raises(BusinessRuleViolationError, match="1 required question"):
            response.submit({SINGLE.id, TEXT.id}, NOW)

        response.set_answer(TEXT, text_answer="Fine")
        response.submit({SINGLE.id, TEXT.id}, NOW)
        assert response.status == ResponseStatus.SUBMITTED
        assert response.finished_at == NOW

    def test_submitted_response_is_locked(self, response: SurveyResponse) -> None:
        response.submit(set(), NOW)
        with pytest.raises(BusinessRuleViolationError):
            response.set_answer(TEXT, text_answer="Too late")
        with pytest.raises(BusinessRuleViolationError):
            response.cancel(NOW)

    def test_cancel(self, response: SurveyResponse) -> None:
        response.cancel(NOW)
        assert response.status == ResponseStatus.CANCELLED
        assert response.finished_at == NOW
