from typing import Protocol

from refahi.domain.common.value_objects import NationalId, UserId
from refahi.domain.identity.entities.user import User


class UserRepositoryProtocol(Protocol):
    def find_by_id(self, user_id: UserId) -> User | None: ...

    def find_by_national_code(self, national_code: NationalId) -> User | None: ...

    def save(self, user: User) -> User: ...
