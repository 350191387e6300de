"""Utility helpers to decide who hears about a domain change and notify them."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from app.domain.entities import Comment, Notification, NotificationType, Project, Task

from .emitter import emit_notification

logger = logging.getLogger(__name__)


def task_link(task_id: int | None) -> str:
    return f"/dashboard?task={task_id}"


def project_link(project_id: int | None) -> str:
    return f"/dashboard?project={project_id}"


def resolve_recipients(candidates: Iterable[int | None], *, actor_id: int | None) -> list[int]:
    """Return ``candidates`` without blanks, repeats or the acting user.

    Order of first appearance is kept so fan-out is deterministic.
    """

    recipients: list[int] = []
    seen: set[int] = set()
    for candidate in candidates:
        if not candidate or candidate == actor_id or candidate in seen:
            continue
        seen.add(candidate)
        recipients.append(candidate)
    return recipients


def _fan_out(
    session: Session,
    recipients: Iterable[int],
    *,
    event_type: NotificationType,
    title: str,
    message: str,
    sender_id: int | None,
    related_task_id: int | None = None,
    related_project_id: int | None = None,
    link: str | None = None,
) -> list[Notification]:
    """Emit once per recipient; one failing recipient does not stop the others."""

    created: list[Notification] = []
    for recipient_id in recipients:
        try:
            notification = emit_notification(
                session,
                recipient_id=recipient_id,
                sender_id=sender_id,
                event_type=event_type,
                title=title,
                message=message,
                related_task_id=related_task_id,
                related_project_id=related_project_id,
                link=link,
            )
        except Exception:
            session.rollback()
            logger.exception(
                "Could not emit %s notification to user %s", event_type.value, recipient_id
            )
            continue
        if notification is not None:
            created.append(notification)
    return created


def notify_task_assignment(
    session: Session,
    *,
    task: Task,
    assigned_user_ids: Iterable[int],
    assigned_by: int,
) -> list[Notification]:
    """Tell newly assigned users about ``task``.

    Callers pass every assignee when the task is created and only the added
    ones when it is updated.
    """

    recipients = resolve_recipients(assigned_user_ids, actor_id=assigned_by)
    logger.info("Creating %d task assignment notification(s)", len(recipients))
    return _fan_out(
        session,
        recipients,
        event_type=NotificationType.TASK_ASSIGNED,
        title="New Task Assigned",
        message=f'You have been assigned to "{task.title}"',
        sender_id=assigned_by,
        related_task_id=task.id,
        related_project_id=task.project_id,
        link=task_link(task.id),
    )


def notify_task_update(
    session: Session,
    *,
    task: Task,
    updated_by: int,
    recipients: Iterable[int],
) -> list[Notification]:
    """Tell the task's participants that it was saved, whatever changed."""

    targets = resolve_recipients(recipients, actor_id=updated_by)
    if not targets:
        logger.info("No recipients for task %s update notification", task.id)
        return []
    logger.info("Creating %d task update notification(s)", len(targets))
    return _fan_out(
        session,
        targets,
        event_type=NotificationType.TASK_UPDATED,
        title="Task Updated",
        message=f'"{task.title}" has been updated',
        sender_id=updated_by,
        related_task_id=task.id,
        related_project_id=task.project_id,
        link=task_link(task.id),
    )


def notify_task_completed(
    session: Session,
    *,
    task: Task,
    completed_by: int,
) -> list[Notification]:
    """Tell the creator and assignees that ``task`` moved to completed."""

    targets = resolve_recipients(
        [task.user_id, *task.assignee_ids], actor_id=completed_by
    )
    if not targets:
        return []
    return _fan_out(
        session,
        targets,
        event_type=NotificationType.TASK_COMPLETED,
        title="Task Completed",
        message=f'"{task.title}" has been completed',
        sender_id=completed_by,
        related_task_id=task.id,
        related_project_id=task.project_id,
        link=task_link(task.id),
    )


def notify_new_comment(
    session: Session,
    *,
    comment: Comment,
    task: Task,
    recipients: Iterable[int],
) -> list[Notification]:
    """Tell the task's participants about a new comment, except its author."""

    targets = resolve_recipients(recipients, actor_id=comment.user_id)
    if not targets:
        logger.info(
            "No recipients for comment on task %s (the author is the only participant)",
            task.id,
        )
        return []
    logger.info("Creating %d comment notification(s)", len(targets))
    return _fan_out(
        session,
        targets,
        event_type=NotificationType.COMMENT_ADDED,
        title="New Comment",
        message=f'New comment on "{task.title}"',
        sender_id=comment.user_id,
        related_task_id=task.id,
        related_project_id=task.project_id,
        link=task_link(task.id),
    )


def notify_project_member_added(
    session: Session,
    *,
    project: Project,
    new_member_id: int,
    added_by: int,
) -> list[Notification]:
    """Tell ``new_member_id`` they joined ``project`` unless they added themselves."""

    if new_member_id == added_by:
        return []
    return _fan_out(
        session,
        [new_member_id],
        event_type=NotificationType.PROJECT_ADDED,
        title="Added to Project",
        message=f'You have been added to "{project.name}"',
        sender_id=added_by,
        related_project_id=project.id,
        link=project_link(project.id),
    )


__all__ = [
    "notify_new_comment",
    "notify_project_member_added",
    "notify_task_assignment",
    "notify_task_completed",
    "notify_task_update",
    "resolve_recipients",
    "project_link",
    "task_link",
]
