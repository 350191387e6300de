"""Use case for persisting Kanban ordering in bulk."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Task
from app.infrastructure.repositories import TaskRepository

from .get_task import get_task_with_access
from .validators import ensure_valid_status


def reorder_tasks(
    session: Session,
    *,
    user_id: int,
    items: Iterable[tuple[int, int, str | None]],
) -> Sequence[Task]:
    """Store ``(task_id, position, status)`` for tasks the user can see.

    The whole batch is rejected if any task is not visible. Reordering does
    not notify anyone.
    """

    positions: list[tuple[int, int, str | None]] = []
    for task_id, position, status in items:
        get_task_with_access(session, task_id=task_id, user_id=user_id)
        if position < 0:
            raise ValueError("Position must not be negative")
        positions.append((task_id, position, ensure_valid_status(status) if status else None))

    repository = TaskRepository(session)
    repository.reorder(positions)
    return [task for task in (repository.get(task_id) for task_id, _, _ in positions) if task]
