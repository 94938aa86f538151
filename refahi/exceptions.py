"""Custom exception hierarchy for the Refahi application layer."""

from fastapi import HTTPException
from starlette import status


class RefahiError(Exception):
    """Base exception for all Refahi application errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(RefahiError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class ValidationError(RefahiError):
    """Validation error."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code=status_code)


class ConflictError(RefahiError):
    """The request conflicts with the current state of a resource."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=409)


class ForbiddenError(RefahiError):
    """The current user may not access the resource."""

    def __init__(self, message: str = "You do not have access to this resource") -> None:
        super().__init__(message, status_code=403)


class ServiceError(RefahiError):
    """Service layer error."""


class MemberNotFoundError(NotFoundError):
    """Member not found error."""

    def __init__(self, member_id: int | None = None, *, message: str | None = None) -> None:
        self.member_id = member_id
        if message:
            super().__init__(message)
        elif member_id is not None:
            super().__init__(f"Member with id {member_id} not found")
        else:
            super().__init__("Member not found")


class TourNotFoundError(NotFoundError):
    """Tour not found error."""

    def __init__(self, tour_id: int) -> None:
        self.tour_id = tour_id
        super().__init__(f"Tour with id {tour_id} not found")


class ReservationNotFoundError(NotFoundError):
    """Reservation not found error."""

    def __init__(self, reservation_id: int | None = None, *, message: str | None = None) -> None:
        self.reservation_id = reservation_id
        if message:
            super().__init__(message)
        elif reservation_id is not None:
            super().__init__(f"Reservation with id {reservation_id} not found")
        else:
            super().__init__("Reservation not found")


class BillNotFoundError(NotFoundError):
    """Bill not found error."""

    def __init__(self, bill_id: int) -> None:
        self.bill_id = bill_id
        super().__init__(f"Bill with id {bill_id} not found")


class PaymentNotFoundError(NotFoundError):
    """Payment not found error."""

    def __init__(self, payment_id: int) -> None:
        self.payment_id = payment_id
        super().__init__(f"Payment with id {payment_id} not found")


class FacilityNotFoundError(NotFoundError):
    """Facility not found error."""

    def __init__(self, facility_id: int) -> None:
        self.facility_id = facility_id
        super().__init__(f"Facility with id {facility_id} not found")


class FacilityCycleNotFoundError(NotFoundError):
    """Facility cycle not found error."""

    def __init__(self, cycle_id: int) -> None:
        self.cycle_id = cycle_id
        super().__init__(f"Facility cycle with id {cycle_id} not found")


class FacilityRequestNotFoundError(NotFoundError):
    """Facility request not found error."""

    def __init__(self, request_id: int) -> None:
        self.request_id = request_id
        super().__init__(f"Facility request with id {request_id} not found")


class SurveyNotFoundError(NotFoundError):
    """Survey not found error."""

    def __init__(self, survey_id: int) -> None:
        self.survey_id = survey_id
        super().__init__(f"Survey with id {survey_id} not found")


class SurveyResponseNotFoundError(NotFoundError):
    """Survey response not found error."""

    def __init__(self, response_id: int) -> None:
        self.response_id = response_id
        super().__init__(f"Survey response with id {response_id} not found")


class InvalidOtpError(RefahiError):
    """The one-time password could not be verified."""

    def __init__(self, message: str = "Invalid or expired verification code") -> None:
        super().__init__(message, status_code=401)


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


class InvalidCredentialsError(RefahiError):
    """A token could not be verified."""

    def __init__(self, message: str = "Invalid or expired refresh token") -> None:
        super().__init__(message, status_code=401)
