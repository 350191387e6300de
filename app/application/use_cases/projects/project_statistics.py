"""Use case for summarizing a project's tasks."""

from sqlalchemy.orm import Session

from app.infrastructure.repositories import TaskRepository

from .get_project import get_project


def project_statistics(session: Session, *, project_id: int, user_id: int) -> dict:
    """Return task totals by status for a project the user can see."""

    get_project(session, project_id=project_id, user_id=user_id)
    return TaskRepository(session).statistics_for_project(project_id)
