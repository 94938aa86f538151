"""User entity for identity management."""

from dataclasses import dataclass
from datetime import datetime

from refahi.domain.common.entity import Entity
from refahi.domain.common.value_objects import NationalId, PhoneNumber, UserId


@dataclass
class User(Entity[UserId]):
    """
    User entity representing an authenticated person.

    Business Rules:
    - National code must be unique (enforced at repository level)
    - Users are created on their first successful one-time password login
    - The admin flag is granted from configuration, never by the user
    """

    id: UserId
    national_code: NationalId
    phone_number: PhoneNumber
    is_admin: bool = False
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def update_phone_number(self, phone_number: PhoneNumber) -> None:
        self.phone_number = phone_number

    def grant_admin(self) -> None:
        self.is_admin = True

    @classmethod
    def create(
        cls, national_code: NationalId, phone_number: PhoneNumber, is_admin: bool = False
    ) -> "User":
        """Create a new user (ID will be 0 until persisted)."""
        return cls(
            id=UserId.generate(),
            national_code=national_code,
            phone_number=phone_number,
            is_admin=is_admin,
        )

    @classmethod
    def create_with_id(
        cls,
        id: UserId,
        national_code: NationalId,
        phone_number: PhoneNumber,
        is_admin: bool,
        is_active: bool,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> "User":
        """Reconstitute a user from persistence."""
        return cls(
            id=id,
            national_code=national_code,
            phone_number=phone_number,
            is_admin=is_admin,
            is_active=is_active,
            created_at=created_at,
            updated_at=updated_at,
        )
