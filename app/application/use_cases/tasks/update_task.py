"""Use case for updating tasks."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from app.application.errors import PermissionDeniedError
from app.application.use_cases.notifications import (
    notify_task_assignment,
    notify_task_completed,
    notify_task_update,
)
from app.application.use_cases.projects import get_project
from app.domain.access import TaskAccess
from app.domain.entities import Task
from app.infrastructure.repositories import ProjectRepository, TaskRepository

from .get_task import get_task_with_access
from .validators import (
    ensure_assignees,
    ensure_valid_priority,
    ensure_valid_status,
    ensure_valid_title,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "status",
        "priority",
        "due_date",
        "project_id",
        "assignee_ids",
        "position",
    }
)


def update_task(
    session: Session,
    *,
    task_id: int,
    user_id: int,
    changes: Mapping[str, Any],
) -> Task:
    """Apply ``changes`` to a task the user can see and notify participants.

    Only the owner may change the assignees. Newly added assignees get a
    ``task_assigned`` notification; the creator and every previous or current
    assignee get ``task_updated`` on every save, whichever fields changed.
    """

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown task fields: {', '.join(sorted(unknown))}")

    current, access = get_task_with_access(session, task_id=task_id, user_id=user_id)

    requested_assignees = changes.get("assignee_ids")
    reassigning = requested_assignees is not None and set(requested_assignees) != set(
        current.assignee_ids
    )
    if reassigning and access is not TaskAccess.OWNER:
        raise PermissionDeniedError("Only task owner can reassign")

    project_id = changes.get("project_id", current.project_id)
    if project_id is None:
        project = None
    elif project_id != current.project_id:
        project = get_project(session, project_id=project_id, user_id=user_id)
    else:
        project = ProjectRepository(session).get(project_id)

    assignee_ids = current.assignee_ids
    if requested_assignees is not None or "project_id" in changes:
        assignee_ids = ensure_assignees(
            session,
            requested_assignees if requested_assignees is not None else current.assignee_ids,
            project=project,
        )

    updated = replace(
        current,
        title=ensure_valid_title(changes["title"])
        if changes.get("title") is not None
        else current.title,
        description=changes.get("description", current.description),
        status=ensure_valid_status(changes["status"]) if changes.get("status") else current.status,
        priority=ensure_valid_priority(changes["priority"])
        if changes.get("priority")
        else current.priority,
        due_date=changes.get("due_date", current.due_date),
        position=changes["position"] if changes.get("position") is not None else current.position,
        project_id=project_id,
        assignee_ids=assignee_ids,
    )
    saved = TaskRepository(session).update(updated)

    added = [uid for uid in saved.assignee_ids if uid not in current.assignee_ids]
    if added:
        notify_task_assignment(
            session, task=saved, assigned_user_ids=added, assigned_by=user_id
        )
    notify_task_update(
        session,
        task=saved,
        updated_by=user_id,
        recipients=[saved.user_id, *current.assignee_ids, *saved.assignee_ids],
    )
    if saved.is_completed and not current.is_completed:
        notify_task_completed(session, task=saved, completed_by=user_id)

    logger.debug("Task %s updated by user %s", saved.id, user_id)
    return saved
