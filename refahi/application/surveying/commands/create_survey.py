from dataclasses import dataclass
from datetime import datetime

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.surveying.protocols import SurveyRepositoryProtocol
from refahi.domain.surveying.entities.survey import Survey
from refahi.domain.surveying.participation_policy import ParticipationPolicy

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CreateSurveyCommand(Command):
    title: str
    description: str | None = None
    start_at: datetime | None = None
    end_at: datetime | None = None
    is_anonymous: bool = False
    max_attempts_per_member: int = 1
    allow_multiple_submissions: bool = False
    cool_down_seconds: int | None = None


class CreateSurveyHandler(CommandHandler[CreateSurveyCommand, Survey]):
    def __init__(self, survey_repository: SurveyRepositoryProtocol, uow: UnitOfWork) -> None:
        self.survey_repository = survey_repository
        self.uow = uow

    def handle(self, command: CreateSurveyCommand) -> Survey:
        policy = ParticipationPolicy(
            max_attempts_per_member=command.max_attempts_per_member,
            allow_multiple_submissions=command.allow_multiple_submissions,
            cool_down_seconds=command.cool_down_seconds,
        )
        with self.uow:
            survey = Survey.create(
                title=command.title,
                description=command.description,
                start_at=command.start_at,
                end_at=command.end_at,
                is_anonymous=command.is_anonymous,
                policy=policy,
            )
            survey = self.survey_repository.save(survey)
            self.uow.commit()

        logger.info("survey_created", survey_id=survey.id.value)
        return survey
