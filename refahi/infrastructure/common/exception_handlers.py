"""Translate domain and application errors to JSON responses."""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from refahi.domain.common.exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    DomainError,
    EntityNotFoundError,
    InvariantViolationError,
)
from refahi.domain.common.exceptions import ValidationError as DomainValidationError
from refahi.exceptions import RefahiError

logger = structlog.get_logger(__name__)

DOMAIN_ERROR_STATUS: list[tuple[type[DomainError], int]] = [
    (DomainValidationError, status.HTTP_400_BAD_REQUEST),
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (BusinessRuleViolationError, status.HTTP_409_CONFLICT),
    (InvariantViolationError, status.HTTP_409_CONFLICT),
]


def status_for_domain_error(exc: DomainError) -> int:
    for error_type, status_code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for_domain_error(exc)
    logger.info(
        "domain_error",
        path=request.url.path,
        error=type(exc).__name__,
        message=exc.message,
        status_code=status_code,
    )
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


async def refahi_error_handler(request: Request, exc: RefahiError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("application_error", path=request.url.path, message=exc.message)
    else:
        logger.info(
            "application_error",
            path=request.url.path,
            error=type(exc).__name__,
            message=exc.message,
            status_code=exc.status_code,
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred. Please try again later."},
    )


EXCEPTION_HANDLERS = {
    DomainError: domain_error_handler,
    RefahiError: refahi_error_handler,
    Exception: unhandled_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)  # type: ignore[arg-type]
