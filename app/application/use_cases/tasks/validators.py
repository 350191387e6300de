"""Validation helpers shared by task use cases."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from app.domain.entities import TASK_PRIORITIES, TASK_STATUSES, Project
from app.infrastructure.repositories import UserRepository


def ensure_valid_title(title: str) -> str:
    cleaned = title.strip()
    if not cleaned:
        raise ValueError("Title is required")
    return cleaned


def ensure_valid_status(status: str) -> str:
    if status not in TASK_STATUSES:
        raise ValueError(f"Status must be one of: {', '.join(TASK_STATUSES)}")
    return status


def ensure_valid_priority(priority: str) -> str:
    if priority not in TASK_PRIORITIES:
        raise ValueError(f"Priority must be one of: {', '.join(TASK_PRIORITIES)}")
    return priority


def ensure_assignees(
    session: Session, assignee_ids: Iterable[int], *, project: Project | None
) -> list[int]:
    """Return the de-duplicated assignees after checking they may be assigned.

    Every id must be an existing user and, when the task belongs to a project,
    a member of that project.
    """

    unique_ids = list(dict.fromkeys(assignee_ids))
    if not unique_ids:
        return []

    known = UserRepository(session).get_map_by_ids(unique_ids)
    if len(known) != len(unique_ids):
        raise ValueError("Some assigned users do not exist")

    if project is not None and any(not project.is_member(uid) for uid in unique_ids):
        raise ValueError(
            "Some users are not members of this project. Add them to the project first."
        )
    return unique_ids
