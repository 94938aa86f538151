import threading
from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider
from sqlalchemy.orm import Session

from refahi.core import container
from refahi.database import DatabaseSession

T = TypeVar("T")

# container.db is process-wide; overrides from request threads and the
# expiry job must not interleave
_db_override_lock = threading.Lock()


def resolve_with_session(provider: Provider[T], db: Session) -> T:
    """Build ``provider`` with every ``container.db`` dependency bound to ``db``."""
    with _db_override_lock, container.db.override(db):
        return provider()


def inject_handler(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Build a FastAPI dependency that resolves ``provider`` from the container.

    Repositories and units of work created for the handler share the
    request's session, because ``container.db`` is overridden with it while
    the handler graph is constructed.
    """

    def dependency(db: DatabaseSession) -> T:
        return resolve_with_session(provider, db)

    return dependency
