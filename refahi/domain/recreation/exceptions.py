"""Recreation domain exceptions."""

from refahi.domain.common.exceptions import BusinessRuleViolationError


class RegistrationClosedError(BusinessRuleViolationError):
    """Raised when a tour is not accepting registrations."""

    def __init__(self, tour_id: int) -> None:
        super().__init__("registration_open", f"Registration for tour {tour_id} is not open")
        self.tour_id = tour_id


class InsufficientCapacityError(BusinessRuleViolationError):
    """Raised when a group does not fit in the remaining seats."""

    def __init__(self, requested: int, remaining: int) -> None:
        super().__init__(
            "capacity_available",
            f"Not enough seats: requested {requested}, remaining {remaining}",
        )
        self.requested = requested
        self.remaining = remaining


class NotEligibleError(BusinessRuleViolationError):
    """Raised when a member does not satisfy a tour's requirements."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("member_eligible", "; ".join(errors) or "Member is not eligible")
        self.errors = errors
