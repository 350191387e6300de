"""Use case for listing the tasks a user can see."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Task
from app.infrastructure.repositories import TaskRepository

from .validators import ensure_valid_priority, ensure_valid_status


def list_tasks(
    session: Session,
    *,
    user_id: int,
    status: str | None = None,
    priority: str | None = None,
    search: str | None = None,
    project_id: int | None = None,
    assigned_user_id: int | None = None,
) -> Sequence[Task]:
    """Return visible tasks, newest first, narrowed by the optional filters.

    ``assigned_user_id`` narrows within the visible tasks; it never widens
    what the caller can see.
    """

    return TaskRepository(session).list_visible(
        user_id,
        status=ensure_valid_status(status) if status else None,
        priority=ensure_valid_priority(priority) if priority else None,
        search=search.strip() if search and search.strip() else None,
        project_id=project_id,
        assigned_user_id=assigned_user_id,
    )
