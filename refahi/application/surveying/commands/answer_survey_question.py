from dataclasses import dataclass, field

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.surveying.access import load_own_response, load_survey
from refahi.application.surveying.protocols import (
    SurveyRepositoryProtocol,
    SurveyResponseRepositoryProtocol,
)
from refahi.domain.common.exceptions import BusinessRuleViolationError, EntityNotFoundError
from refahi.domain.common.value_objects import QuestionId, QuestionOptionId
from refahi.domain.surveying.entities.survey_response import SurveyResponse
from refahi.utils import utc_now


@dataclass(frozen=True)
class AnswerSurveyQuestionCommand(Command):
    response_id: int
    national_code: str
    question_id: int
    text_answer: str | None = None
    selected_option_ids: list[int] = field(default_factory=list)


class AnswerSurveyQuestionHandler(CommandHandler[AnswerSurveyQuestionCommand, SurveyResponse]):
    def __init__(
        self,
        survey_repository: SurveyRepositoryProtocol,
        response_repository: SurveyResponseRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.survey_repository = survey_repository
        self.response_repository = response_repository
        self.uow = uow

    def handle(self, command: AnswerSurveyQuestionCommand) -> SurveyResponse:
        with self.uow:
            response = load_own_response(
                self.response_repository, command.response_id, command.national_code
            )
            survey = load_survey(self.survey_repository, response.survey_id.value)
            if not survey.is_accepting_responses(utc_now()):
                raise BusinessRuleViolationError(
                    "survey_accepting", "The survey is not accepting responses"
                )
            question = survey.get_question(QuestionId(command.question_id))
            if question is None:
                raise EntityNotFoundError("Question", command.question_id)

            response.set_answer(
                question,
                text_answer=command.text_answer,
                selected_option_ids=[QuestionOptionId(i) for i in command.selected_option_ids],
            )
            response = self.response_repository.save(response)
            self.uow.commit()
        return response
