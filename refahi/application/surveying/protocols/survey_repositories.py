from datetime import datetime
from typing import Protocol

from refahi.application.common.pagination import Pagination
from refahi.domain.common.value_objects import NationalId, SurveyId, SurveyResponseId
from refahi.domain.surveying.entities.survey import Survey
from refahi.domain.surveying.entities.survey_response import SurveyResponse
from refahi.domain.surveying.enums import SurveyState


class SurveyRepositoryProtocol(Protocol):
    def find_by_id(self, survey_id: SurveyId) -> Survey | None: ...

    def find_accepting(
        self, now: datetime, pagination: Pagination
    ) -> tuple[list[Survey], int]:
        """Active surveys whose window contains ``now``."""
        ...

    def find_all(
        self, pagination: Pagination, state: SurveyState | None = None
    ) -> tuple[list[Survey], int]: ...

    def save(self, survey: Survey) -> Survey: ...


class SurveyResponseRepositoryProtocol(Protocol):
    def find_by_id(self, response_id: SurveyResponseId) -> SurveyResponse | None: ...

    def find_attempts(
        self, survey_id: SurveyId, national_code: NationalId
    ) -> list[SurveyResponse]:
        """All attempts of a participant, by attempt number."""
        ...

    def find_by_participant(
        self, national_code: NationalId, pagination: Pagination
    ) -> tuple[list[SurveyResponse], int]: ...

    def save(self, response: SurveyResponse) -> SurveyResponse: ...
