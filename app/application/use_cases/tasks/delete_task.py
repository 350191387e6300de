"""Use case for deleting tasks."""

from sqlalchemy.orm import Session

from app.infrastructure.repositories import TaskRepository

from .get_task import get_owned_task


def delete_task(session: Session, *, task_id: int, user_id: int) -> None:
    """Delete a task; only its creator may do so."""

    get_owned_task(session, task_id=task_id, user_id=user_id)
    TaskRepository(session).delete(task_id)
