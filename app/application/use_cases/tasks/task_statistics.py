"""Use case for summarizing the tasks a user created or is assigned to."""

from sqlalchemy.orm import Session

from app.infrastructure.repositories import TaskRepository


def task_statistics(session: Session, *, user_id: int) -> dict:
    return TaskRepository(session).statistics_for_user(user_id)
