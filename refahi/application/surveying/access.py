"""Loading helpers shared by the survey handlers."""

from refahi.application.surveying.protocols import (
    SurveyRepositoryProtocol,
    SurveyResponseRepositoryProtocol,
)
from refahi.domain.common.value_objects import SurveyId, SurveyResponseId
from refahi.domain.surveying.entities.survey import Survey
from refahi.domain.surveying.entities.survey_response import SurveyResponse
from refahi.exceptions import ForbiddenError, SurveyNotFoundError, SurveyResponseNotFoundError


def load_survey(survey_repository: SurveyRepositoryProtocol, survey_id: int) -> Survey:
    survey = survey_repository.find_by_id(SurveyId(survey_id))
    if survey is None:
        raise SurveyNotFoundError(survey_id)
    return survey


def load_own_response(
    response_repository: SurveyResponseRepositoryProtocol, response_id: int, national_code: str
) -> SurveyResponse:
    response = response_repository.find_by_id(SurveyResponseId(response_id))
    if response is None:
        raise SurveyResponseNotFoundError(response_id)
    if response.participant_national_code.value != national_code:
        raise ForbiddenError("You do not have access to this survey response")
    return response
