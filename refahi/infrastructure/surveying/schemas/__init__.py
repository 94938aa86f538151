from .survey_schemas import (
    AddQuestionRequest,
    AnswerRequest,
    CreateSurveyRequest,
    ResponseActionResponse,
    SurveyActionResponse,
    SurveyDetailSchema,
    SurveyResponseSchema,
    SurveySummarySchema,
)

__all__ = [
    "AddQuestionRequest",
    "AnswerRequest",
    "CreateSurveyRequest",
    "ResponseActionResponse",
    "SurveyActionResponse",
    "SurveyDetailSchema",
    "SurveyResponseSchema",
    "SurveySummarySchema",
]
