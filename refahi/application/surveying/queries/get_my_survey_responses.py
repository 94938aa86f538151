from dataclasses import dataclass, field

from refahi.application.common import PaginatedResult, Pagination, Query, QueryHandler
from refahi.application.surveying.protocols import SurveyResponseRepositoryProtocol
from refahi.domain.common.value_objects import NationalId
from refahi.domain.surveying.entities.survey_response import SurveyResponse


@dataclass(frozen=True)
class GetMySurveyResponsesQuery(Query):
    national_code: str
    pagination: Pagination = field(default_factory=Pagination)


class GetMySurveyResponsesHandler(
    QueryHandler[GetMySurveyResponsesQuery, PaginatedResult[SurveyResponse]]
):
    def __init__(self, response_repository: SurveyResponseRepositoryProtocol) -> None:
        self.response_repository = response_repository

    def handle(self, query: GetMySurveyResponsesQuery) -> PaginatedResult[SurveyResponse]:
        items, total = self.response_repository.find_by_participant(
            NationalId(query.national_code), query.pagination
        )
        return PaginatedResult(items=items, total=total, pagination=query.pagination)
