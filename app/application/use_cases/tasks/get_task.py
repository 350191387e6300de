"""Use cases for reading a single task."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.application.errors import NotFoundError, PermissionDeniedError
from app.domain.access import TaskAccess, can_access_task
from app.domain.entities import Task
from app.infrastructure.repositories import ProjectRepository, TaskRepository


def get_task_with_access(
    session: Session, *, task_id: int, user_id: int
) -> tuple[Task, TaskAccess]:
    """Return the task and how ``user_id`` relates to it.

    Tasks the user cannot see are reported as missing.
    """

    task = TaskRepository(session).get(task_id)
    if task is None:
        raise NotFoundError("Task not found")

    project = ProjectRepository(session).get(task.project_id) if task.project_id else None
    access = can_access_task(user_id, task, project)
    if not access.can_view:
        raise NotFoundError("Task not found")
    return task, access


def get_task(session: Session, *, task_id: int, user_id: int) -> Task:
    task, _ = get_task_with_access(session, task_id=task_id, user_id=user_id)
    return task


def get_owned_task(session: Session, *, task_id: int, user_id: int) -> Task:
    task, access = get_task_with_access(session, task_id=task_id, user_id=user_id)
    if access is not TaskAccess.OWNER:
        raise PermissionDeniedError("Only the task owner can do this")
    return task
