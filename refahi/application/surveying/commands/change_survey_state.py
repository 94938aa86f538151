"""Move a survey through Draft, Active and Closed."""

from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.surveying.access import load_survey
from refahi.application.surveying.protocols import SurveyRepositoryProtocol
from refahi.domain.surveying.entities.survey import Survey
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ActivateSurveyCommand(Command):
    survey_id: int


@dataclass(frozen=True)
class CloseSurveyCommand(Command):
    survey_id: int


class ActivateSurveyHandler(CommandHandler[ActivateSurveyCommand, Survey]):
    def __init__(self, survey_repository: SurveyRepositoryProtocol, uow: UnitOfWork) -> None:
        self.survey_repository = survey_repository
        self.uow = uow

    def handle(self, command: ActivateSurveyCommand) -> Survey:
        with self.uow:
            survey = load_survey(self.survey_repository, command.survey_id)
            survey.activate(utc_now())
            survey = self.survey_repository.save(survey)
            self.uow.commit()

        logger.info("survey_activated", survey_id=command.survey_id)
        return survey


class CloseSurveyHandler(CommandHandler[CloseSurveyCommand, Survey]):
    def __init__(self, survey_repository: SurveyRepositoryProtocol, uow: UnitOfWork) -> None:
        self.survey_repository = survey_repository
        self.uow = uow

    def handle(self, command: CloseSurveyCommand) -> Survey:
        with self.uow:
            survey = load_survey(self.survey_repository, command.survey_id)
            survey.close()
            survey = self.survey_repository.save(survey)
            self.uow.commit()

        logger.info("survey_closed", survey_id=command.survey_id)
        return survey
