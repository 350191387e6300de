"""Use case for finding collaborators by name or email."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 10


def search_users(session: Session, *, query: str | None, exclude_id: int) -> Sequence[User]:
    """Return up to ten users matching ``query``; short queries match nothing."""

    term = (query or "").strip()
    if len(term) < MIN_QUERY_LENGTH:
        return []
    return UserRepository(session).search(term, exclude_id=exclude_id, limit=MAX_RESULTS)
