"""Use case for creating tasks."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import notify_task_assignment
from app.application.use_cases.projects import get_project
from app.domain.entities import TASK_PRIORITY_MEDIUM, TASK_STATUS_PENDING, Task
from app.infrastructure.repositories import TaskRepository
from app.utils import now_in_app_timezone

from .validators import (
    ensure_assignees,
    ensure_valid_priority,
    ensure_valid_status,
    ensure_valid_title,
)


def create_task(
    session: Session,
    *,
    user_id: int,
    title: str,
    description: str | None = None,
    status: str | None = None,
    priority: str | None = None,
    due_date: datetime | None = None,
    project_id: int | None = None,
    assignee_ids: Iterable[int] = (),
    position: int = 0,
) -> Task:
    """Create a task owned by ``user_id`` and notify its assignees."""

    project = (
        get_project(session, project_id=project_id, user_id=user_id)
        if project_id is not None
        else None
    )
    task = Task(
        id=None,
        title=ensure_valid_title(title),
        description=description,
        status=ensure_valid_status(status) if status else TASK_STATUS_PENDING,
        priority=ensure_valid_priority(priority) if priority else TASK_PRIORITY_MEDIUM,
        user_id=user_id,
        project_id=project_id,
        assignee_ids=ensure_assignees(session, assignee_ids, project=project),
        due_date=due_date,
        position=position,
        created_at=now_in_app_timezone(),
    )
    saved = TaskRepository(session).create(task)

    if saved.assignee_ids:
        notify_task_assignment(
            session, task=saved, assigned_user_ids=saved.assignee_ids, assigned_by=user_id
        )
    return saved
