from .survey_repositories import SurveyRepositoryProtocol, SurveyResponseRepositoryProtocol

__all__ = ["SurveyRepositoryProtocol", "SurveyResponseRepositoryProtocol"]
