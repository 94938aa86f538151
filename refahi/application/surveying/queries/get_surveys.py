from dataclasses import dataclass, field

from refahi.application.common import PaginatedResult, Pagination, Query, QueryHandler
from refahi.application.surveying.access import load_survey
from refahi.application.surveying.protocols import SurveyRepositoryProtocol
from refahi.domain.surveying.entities.survey import Survey
from refahi.utils import utc_now


@dataclass(frozen=True)
class GetActiveSurveysQuery(Query):
    pagination: Pagination = field(default_factory=Pagination)


@dataclass(frozen=True)
class GetSurveyQuery(Query):
    survey_id: int


class GetActiveSurveysHandler(QueryHandler[GetActiveSurveysQuery, PaginatedResult[Survey]]):
    """Surveys that accept responses right now."""

    def __init__(self, survey_repository: SurveyRepositoryProtocol) -> None:
        self.survey_repository = survey_repository

    def handle(self, query: GetActiveSurveysQuery) -> PaginatedResult[Survey]:
        items, total = self.survey_repository.find_accepting(utc_now(), query.pagination)
        return PaginatedResult(items=items, total=total, pagination=query.pagination)


class GetSurveyHandler(QueryHandler[GetSurveyQuery, Survey]):
    def __init__(self, survey_repository: SurveyRepositoryProtocol) -> None:
        self.survey_repository = survey_repository

    def handle(self, query: GetSurveyQuery) -> Survey:
        return load_survey(self.survey_repository, query.survey_id)
