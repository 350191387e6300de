"""Use case for deleting projects."""

from sqlalchemy.orm import Session

from app.infrastructure.repositories import ProjectRepository

from .get_project import get_owned_project


def delete_project(session: Session, *, project_id: int, user_id: int) -> None:
    """Delete the project; its tasks survive without a project."""

    get_owned_project(session, project_id=project_id, user_id=user_id)
    ProjectRepository(session).delete(project_id)
