"""Membership domain exceptions."""

from refahi.domain.common.exceptions import BusinessRuleViolationError


class DuplicateMemberError(BusinessRuleViolationError):
    """Raised when a national code or membership number is already registered."""

    def __init__(self, field_name: str, value: str) -> None:
        super().__init__("unique_member", f"A member with {field_name} {value} already exists")
        self.field_name = field_name
        self.value = value
