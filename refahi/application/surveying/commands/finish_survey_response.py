"""Submit or cancel an active survey attempt."""

from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.surveying.access import load_own_response, load_survey
from refahi.application.surveying.protocols import (
    SurveyRepositoryProtocol,
    SurveyResponseRepositoryProtocol,
)
from refahi.domain.surveying.entities.survey_response import SurveyResponse
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SubmitSurveyResponseCommand(Command):
    response_id: int
    national_code: str


@dataclass(frozen=True)
class CancelSurveyResponseCommand(Command):
    response_id: int
    national_code: str


class SubmitSurveyResponseHandler(CommandHandler[SubmitSurveyResponseCommand, SurveyResponse]):
    def __init__(
        self,
        survey_repository: SurveyRepositoryProtocol,
        response_repository: SurveyResponseRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.survey_repository = survey_repository
        self.response_repository = response_repository
        self.uow = uow

    def handle(self, command: SubmitSurveyResponseCommand) -> SurveyResponse:
        with self.uow:
            response = load_own_response(
                self.response_repository, command.response_id, command.national_code
            )
            survey = load_survey(self.survey_repository, response.survey_id.value)
            response.submit(survey.required_question_ids, utc_now())
            response = self.response_repository.save(response)
            self.uow.commit()

        logger.info(
            "survey_response_submitted",
            survey_id=response.survey_id.value,
            response_id=response.id.value,
            answers=len(response.answers),
        )
        return response


class CancelSurveyResponseHandler(CommandHandler[CancelSurveyResponseCommand, SurveyResponse]):
    def __init__(
        self, response_repository: SurveyResponseRepositoryProtocol, uow: UnitOfWork
    ) -> None:
        self.response_repository = response_repository
        self.uow = uow

    def handle(self, command: CancelSurveyResponseCommand) -> SurveyResponse:
        with self.uow:
            response = load_own_response(
                self.response_repository, command.response_id, command.national_code
            )
            response.cancel(utc_now())
            response = self.response_repository.save(response)
            self.uow.commit()

        logger.info("survey_response_cancelled", response_id=response.id.value)
        return response
