from dataclasses import dataclass

from refahi.application.common import Query, QueryHandler
from refahi.application.identity.protocols import UserRepositoryProtocol
from refahi.domain.common.value_objects import UserId
from refahi.domain.identity.entities.user import User
from refahi.domain.identity.exceptions import UserNotFoundError


@dataclass(frozen=True)
class GetCurrentUserQuery(Query):
    user_id: int


class GetCurrentUserHandler(QueryHandler[GetCurrentUserQuery, User]):
    def __init__(self, user_repository: UserRepositoryProtocol) -> None:
        self.user_repository = user_repository

    def handle(self, query: GetCurrentUserQuery) -> User:
        user = self.user_repository.find_by_id(UserId(query.user_id))
        if user is None:
            raise UserNotFoundError(query.user_id)
        return user
