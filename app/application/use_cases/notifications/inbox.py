"""Use cases for reading and tidying a user's notification inbox."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.application.errors import NotFoundError
from app.domain.entities import NotificationView
from app.infrastructure.repositories import NotificationRepository

MAX_PAGE_SIZE = 100


def list_notifications(
    session: Session,
    *,
    user_id: int,
    unread_only: bool = False,
    limit: int = 20,
) -> tuple[Sequence[NotificationView], int]:
    """Return the newest notifications and the total unread count."""

    if limit < 1:
        raise ValueError("limit must be positive")
    repository = NotificationRepository(session)
    notifications = repository.list_for_user(
        user_id, unread_only=unread_only, limit=min(limit, MAX_PAGE_SIZE)
    )
    return notifications, repository.count_unread(user_id)


def list_unread_notifications(session: Session, *, user_id: int) -> Sequence[NotificationView]:
    return NotificationRepository(session).list_for_user(
        user_id, unread_only=True, limit=MAX_PAGE_SIZE
    )


def mark_notification_read(
    session: Session, *, notification_id: int, user_id: int
) -> NotificationView:
    """Flip the read flag of one notification addressed to ``user_id``."""

    view = NotificationRepository(session).mark_as_read(notification_id, user_id=user_id)
    if view is None:
        raise NotFoundError("Notification not found")
    return view


def mark_notifications_read(
    session: Session, *, notification_ids: Iterable[int], user_id: int
) -> int:
    return NotificationRepository(session).mark_many_as_read(notification_ids, user_id=user_id)


def mark_all_notifications_read(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).mark_all_as_read(user_id)


def delete_notification(session: Session, *, notification_id: int, user_id: int) -> None:
    if not NotificationRepository(session).delete_for_user(notification_id, user_id=user_id):
        raise NotFoundError("Notification not found")


def clear_read_notifications(session: Session, *, user_id: int) -> int:
    """Delete every notification ``user_id`` has already read."""

    return NotificationRepository(session).delete_read(user_id)


__all__ = [
    "MAX_PAGE_SIZE",
    "clear_read_notifications",
    "delete_notification",
    "list_notifications",
    "list_unread_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "mark_notifications_read",
]
