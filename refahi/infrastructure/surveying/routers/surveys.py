"""API routes for surveys and survey responses."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from refahi.application.common import Pagination
from refahi.application.surveying.commands.add_survey_question import (
    AddSurveyQuestionCommand,
    AddSurveyQuestionHandler,
)
from refahi.application.surveying.commands.answer_survey_question import (
    AnswerSurveyQuestionCommand,
    AnswerSurveyQuestionHandler,
)
from refahi.application.surveying.commands.change_survey_state import (
    ActivateSurveyCommand,
    ActivateSurveyHandler,
    CloseSurveyCommand,
    CloseSurveyHandler,
)
from refahi.application.surveying.commands.create_survey import (
    CreateSurveyCommand,
    CreateSurveyHandler,
)
from refahi.application.surveying.commands.finish_survey_response import (
    CancelSurveyResponseCommand,
    CancelSurveyResponseHandler,
    SubmitSurveyResponseCommand,
    SubmitSurveyResponseHandler,
)
from refahi.application.surveying.commands.start_survey_response import (
    StartSurveyResponseCommand,
    StartSurveyResponseHandler,
)
from refahi.application.surveying.queries.get_my_survey_responses import (
    GetMySurveyResponsesHandler,
    GetMySurveyResponsesQuery,
)
from refahi.application.surveying.queries.get_surveys import (
    GetActiveSurveysHandler,
    GetActiveSurveysQuery,
    GetSurveyHandler,
    GetSurveyQuery,
)
from refahi.core import container
from refahi.domain.common.exceptions import DomainError
from refahi.domain.surveying.entities.survey import Survey
from refahi.domain.surveying.entities.survey_response import SurveyResponse
from refahi.exceptions import RefahiError
from refahi.infrastructure.common.di import inject_handler
from refahi.infrastructure.common.schemas import PaginatedResponse
from refahi.infrastructure.identity.dependencies import CurrentAdmin, CurrentUser
from refahi.infrastructure.surveying.schemas import (
    AddQuestionRequest,
    AnswerRequest,
    CreateSurveyRequest,
    ResponseActionResponse,
    SurveyActionResponse,
    SurveyDetailSchema,
    SurveyResponseSchema,
    SurveySummarySchema,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["surveys"])


def _survey_response(survey: Survey, message: str) -> SurveyActionResponse:
    return SurveyActionResponse(
        success=True, message=message, survey=SurveyDetailSchema.from_domain(survey)
    )


def _attempt_response(response: SurveyResponse, message: str) -> ResponseActionResponse:
    return ResponseActionResponse(
        success=True, message=message, response=SurveyResponseSchema.from_domain(response)
    )


@router.post("/surveys", response_model=SurveyActionResponse, status_code=status.HTTP_201_CREATED)
def create_survey(
    request: CreateSurveyRequest,
    _: CurrentAdmin,
    handler: CreateSurveyHandler = Depends(inject_handler(container.create_survey_handler)),
) -> SurveyActionResponse:
    try:
        survey = handler.handle(CreateSurveyCommand(**request.model_dump()))
        return _survey_response(survey, "Survey created successfully")
    except (RefahiError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to create survey: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.post(
    "/surveys/{survey_id}/questions",
    response_model=SurveyActionResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_survey_question(
    survey_id: int,
    request: AddQuestionRequest,
    _: CurrentAdmin,
    handler: AddSurveyQuestionHandler = Depends(
        inject_handler(container.add_survey_question_handler)
    ),
) -> SurveyActionResponse:
    """
    Add a question to a draft survey.

    Choice questions take 2 to 25 options, FixedMCQ4 exactly four and
    textual questions none.
    """
    survey = handler.handle(AddSurveyQuestionCommand(survey_id=survey_id, **request.model_dump()))
    return _survey_response(survey, "Question added")


@router.post("/surveys/{survey_id}/activate", response_model=SurveyActionResponse)
def activate_survey(
    survey_id: int,
    _: CurrentAdmin,
    handler: ActivateSurveyHandler = Depends(inject_handler(container.activate_survey_handler)),
) -> SurveyActionResponse:
    survey = handler.handle(ActivateSurveyCommand(survey_id=survey_id))
    return _survey_response(survey, "Survey activated")


@router.post("/surveys/{survey_id}/close", response_model=SurveyActionResponse)
def close_survey(
    survey_id: int,
    _: CurrentAdmin,
    handler: CloseSurveyHandler = Depends(inject_handler(container.close_survey_handler)),
) -> SurveyActionResponse:
    survey = handler.handle(CloseSurveyCommand(survey_id=survey_id))
    return _survey_response(survey, "Survey closed")


@router.get("/surveys", response_model=PaginatedResponse[SurveySummarySchema])
def list_active_surveys(
    _: CurrentUser,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    handler: GetActiveSurveysHandler = Depends(
        inject_handler(container.get_active_surveys_handler)
    ),
) -> PaginatedResponse[SurveySummarySchema]:
    result = handler.handle(
        GetActiveSurveysQuery(pagination=Pagination(page=page, page_size=page_size))
    )
    return PaginatedResponse.from_result(
        result, [SurveySummarySchema.from_domain(s) for s in result.items]
    )


@router.get("/surveys/{survey_id}", response_model=SurveyDetailSchema)
def get_survey(
    survey_id: int,
    _: CurrentUser,
    handler: GetSurveyHandler = Depends(inject_handler(container.get_survey_handler)),
) -> SurveyDetailSchema:
    return SurveyDetailSchema.from_domain(handler.handle(GetSurveyQuery(survey_id=survey_id)))


@router.post(
    "/surveys/{survey_id}/responses",
    response_model=ResponseActionResponse,
    status_code=status.HTTP_201_CREATED,
)
def start_survey_response(
    survey_id: int,
    current_user: CurrentUser,
    handler: StartSurveyResponseHandler = Depends(
        inject_handler(container.start_survey_response_handler)
    ),
) -> ResponseActionResponse:
    """Start an attempt, or return the attempt that is still active."""
    response = handler.handle(
        StartSurveyResponseCommand(
            survey_id=survey_id, national_code=current_user.national_code.value
        )
    )
    return _attempt_response(response, "Survey attempt started")


@router.get("/survey-responses/me", response_model=PaginatedResponse[SurveyResponseSchema])
def get_my_survey_responses(
    current_user: CurrentUser,
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    handler: GetMySurveyResponsesHandler = Depends(
        inject_handler(container.get_my_survey_responses_handler)
    ),
) -> PaginatedResponse[SurveyResponseSchema]:
    result = handler.handle(
        GetMySurveyResponsesQuery(
            national_code=current_user.national_code.value,
            pagination=Pagination(page=page, page_size=page_size),
        )
    )
    return PaginatedResponse.from_result(
        result, [SurveyResponseSchema.from_domain(r) for r in result.items]
    )


@router.put("/survey-responses/{response_id}/answers", response_model=ResponseActionResponse)
def answer_survey_question(
    response_id: int,
    request: AnswerRequest,
    current_user: CurrentUser,
    handler: AnswerSurveyQuestionHandler = Depends(
        inject_handler(container.answer_survey_question_handler)
    ),
) -> ResponseActionResponse:
    response = handler.handle(
        AnswerSurveyQuestionCommand(
            response_id=response_id,
            national_code=current_user.national_code.value,
            **request.model_dump(),
        )
    )
    return _attempt_response(response, "Answer saved")


@router.post("/survey-responses/{response_id}/submit", response_model=ResponseActionResponse)
def submit_survey_response(
    response_id: int,
    current_user: CurrentUser,
    handler: SubmitSurveyResponseHandler = Depends(
        inject_handler(container.submit_survey_response_handler)
    ),
) -> ResponseActionResponse:
    response = handler.handle(
        SubmitSurveyResponseCommand(
            response_id=response_id, national_code=current_user.national_code.value
        )
    )
    return _attempt_response(response, "Survey submitted")


@router.post("/survey-responses/{response_id}/cancel", response_model=ResponseActionResponse)
def cancel_survey_response(
    response_id: int,
    current_user: CurrentUser,
    handler: CancelSurveyResponseHandler = Depends(
        inject_handler(container.cancel_survey_response_handler)
    ),
) -> ResponseActionResponse:
    response = handler.handle(
        CancelSurveyResponseCommand(
            response_id=response_id, national_code=current_user.national_code.value
        )
    )
    return _attempt_response(response, "Survey attempt cancelled")
