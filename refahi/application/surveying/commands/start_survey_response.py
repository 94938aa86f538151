from dataclasses import dataclass

import structlog

from refahi.application.common import Command, CommandHandler, UnitOfWork
from refahi.application.surveying.access import load_survey
from refahi.application.surveying.protocols import (
    SurveyRepositoryProtocol,
    SurveyResponseRepositoryProtocol,
)
from refahi.domain.common.exceptions import BusinessRuleViolationError
from refahi.domain.common.value_objects import NationalId
from refahi.domain.surveying.entities.survey_response import SurveyResponse
from refahi.domain.surveying.enums import ResponseStatus
from refahi.utils import utc_now

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StartSurveyResponseCommand(Command):
    survey_id: int
    national_code: str


class StartSurveyResponseHandler(CommandHandler[StartSurveyResponseCommand, SurveyResponse]):
    """
    Start the participant's next attempt at a survey.

    An attempt that is still active is returned instead of opening a new one.
    """

    def __init__(
        self,
        survey_repository: SurveyRepositoryProtocol,
        response_repository: SurveyResponseRepositoryProtocol,
        uow: UnitOfWork,
    ) -> None:
        self.survey_repository = survey_repository
        self.response_repository = response_repository
        self.uow = uow

    def handle(self, command: StartSurveyResponseCommand) -> SurveyResponse:
        now = utc_now()
        national_code = NationalId(command.national_code)
        with self.uow:
            survey = load_survey(self.survey_repository, command.survey_id)
            if not survey.is_accepting_responses(now):
                raise BusinessRuleViolationError(
                    "survey_accepting", "The survey is not accepting responses"
                )

            attempts = self.response_repository.find_attempts(survey.id, national_code)
            active = next((a for a in attempts if a.status == ResponseStatus.ACTIVE), None)
            if active is not None:
                return active

            attempt_number = max((a.attempt_number for a in attempts), default=0) + 1
            if not survey.policy.is_attempt_allowed(attempt_number):
                raise BusinessRuleViolationError(
                    "attempts_remaining", "No attempts left for this survey"
                )

            finished = [a.finished_at for a in attempts if a.finished_at is not None]
            if not survey.policy.is_cool_down_passed(max(finished, default=None), now):
                raise BusinessRuleViolationError(
                    "cool_down_passed", "Please wait before starting another attempt"
                )

            submitted = any(a.status == ResponseStatus.SUBMITTED for a in attempts)
            if submitted and not survey.policy.allow_multiple_submissions:
                raise BusinessRuleViolationError(
                    "single_submission", "You have already submitted this survey"
                )

            response = SurveyResponse.start(survey.id, national_code, attempt_number, now)
            response = self.response_repository.save(response)
            self.uow.commit()

        logger.info(
            "survey_response_started",
            survey_id=command.survey_id,
            response_id=response.id.value,
            attempt_number=attempt_number,
        )
        return response
