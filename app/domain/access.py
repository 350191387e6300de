"""Capability checks shared by every task and comment use case."""

from __future__ import annotations

from enum import Enum

from .entities import Project, Task


class TaskAccess(str, Enum):
    """Relationship a user has with a task, strongest first."""

    OWNER = "owner"
    ASSIGNEE = "assignee"
    PROJECT_MEMBER = "project_member"
    NONE = "none"

    @property
    def can_view(self) -> bool:
        return self is not TaskAccess.NONE


def can_access_task(user_id: int, task: Task, project: Project | None = None) -> TaskAccess:
    """Return how ``user_id`` relates to ``task``.

    ``project`` must be the task's project when the task has one; membership
    in an unrelated project never grants access.
    """

    if task.user_id == user_id:
        return TaskAccess.OWNER
    if user_id in task.assignee_ids:
        return TaskAccess.ASSIGNEE
    if (
        project is not None
        and task.project_id is not None
        and project.id == task.project_id
        and project.is_member(user_id)
    ):
        return TaskAccess.PROJECT_MEMBER
    return TaskAccess.NONE


__all__ = ["TaskAccess", "can_access_task"]
