from dataclasses import dataclass, field

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.surveying.access import load_survey
from refahi.application.surveying.protocols import SurveyRepositoryProtocol
from refahi.domain.surveying.entities.survey import Survey
from refahi.domain.surveying.enums import QuestionKind

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class AddSurveyQuestionCommand(Command):
    survey_id: int
    kind: QuestionKind
    text: str
    is_required: bool = True
    options: list[str] = field(default_factory=list)


class AddSurveyQuestionHandler(CommandHandler[AddSurveyQuestionCommand, Survey]):
    def __init__(self, survey_repository: SurveyRepositoryProtocol, uow: UnitOfWork) -> None:
        self.survey_repository = survey_repository
        self.uow = uow

    def handle(self, command: AddSurveyQuestionCommand) -> Survey:
        with self.uow:
            survey = load_survey(self.survey_repository, command.survey_id)
            survey.add_question(
                kind=command.kind,
                text=command.text,
                is_required=command.is_required,
                options=command.options,
            )
            survey = self.survey_repository.save(survey)
            self.uow.commit()

        logger.info(
            "survey_question_added",
            survey_id=command.survey_id,
            kind=command.kind.value,
            question_count=len(survey.questions),
        )
        return survey
