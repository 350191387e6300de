"""Use cases for reading a single project."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.application.errors import NotFoundError, PermissionDeniedError
from app.domain.entities import Project, Task
from app.infrastructure.repositories import ProjectRepository, TaskRepository


def get_project(session: Session, *, project_id: int, user_id: int) -> Project:
    """Return the project if ``user_id`` owns it or is a member."""

    project = ProjectRepository(session).get_for_member(project_id, user_id)
    if project is None:
        raise NotFoundError("Project not found")
    return project


def get_owned_project(session: Session, *, project_id: int, user_id: int) -> Project:
    """Return the project if ``user_id`` owns it.

    Members get :class:`PermissionDeniedError`; everyone else gets
    :class:`NotFoundError`.
    """

    project = get_project(session, project_id=project_id, user_id=user_id)
    if not project.is_owner(user_id):
        raise PermissionDeniedError("Only the project owner can do this")
    return project


def get_project_with_tasks(
    session: Session, *, project_id: int, user_id: int
) -> tuple[Project, Sequence[Task]]:
    project = get_project(session, project_id=project_id, user_id=user_id)
    return project, TaskRepository(session).list_for_project(project_id)
