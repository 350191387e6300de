"""Persist a notification and push it to the recipient's open connections."""

from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import Notification, NotificationType, NotificationView
from app.infrastructure.notifications import dispatch_notification
from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def emit_notification(
    session: Session,
    *,
    recipient_id: int,
    event_type: NotificationType | str,
    title: str,
    message: str,
    sender_id: int | None = None,
    related_task_id: int | None = None,
    related_project_id: int | None = None,
    link: str | None = None,
) -> Notification | None:
    """Store one notification record and broadcast it once.

    The record is committed before anything is sent, so a broadcast failure
    never loses it. Returns ``None`` when the record duplicates one created
    inside the dedup window; nothing is broadcast in that case. Any other
    persistence failure propagates to the caller.
    """

    if not recipient_id:
        raise ValueError("A notification requires a recipient")
    try:
        kind = NotificationType(event_type)
    except ValueError as exc:
        raise ValueError(f"Unknown notification type: {event_type!r}") from exc

    settings = get_settings()
    repository = NotificationRepository(session)
    saved = repository.create(
        Notification(
            id=None,
            recipient_id=recipient_id,
            sender_id=sender_id,
            event_type=kind,
            title=title,
            message=message,
            related_task_id=related_task_id,
            related_project_id=related_project_id,
            is_read=False,
            link=link,
            created_at=now_in_app_timezone(),
        ),
        dedup_window=timedelta(seconds=settings.notification_dedup_window_seconds),
    )
    if saved is None:
        logger.info(
            "Suppressed duplicate %s notification for user %s (task %s, sender %s)",
            kind.value,
            recipient_id,
            related_task_id,
            sender_id,
        )
        return None

    logger.debug("Stored %s notification %s for user %s", kind.value, saved.id, recipient_id)

    try:
        view = repository.get_view(saved.id) or NotificationView(notification=saved)
        dispatch_notification(view)
    except Exception:
        logger.warning(
            "Broadcast of notification %s to user %s failed; the record is kept",
            saved.id,
            recipient_id,
            exc_info=True,
        )
    return saved


__all__ = ["emit_notification"]
