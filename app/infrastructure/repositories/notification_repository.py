"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationType, NotificationView
from app.infrastructure.models import NotificationModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

logger = logging.getLogger(__name__)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: int,
        *,
        unread_only: bool = False,
        limit: int | None = 20,
    ) -> Sequence[NotificationView]:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.recipient_id == user_id
        )
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_view(model) for model in query.all()]

    def count_unread(self, user_id: int) -> int:
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .count()
        )

    def get_view(self, notification_id: int) -> NotificationView | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_view(model) if model else None

    def find_recent_duplicate(
        self,
        notification: Notification,
        *,
        window: timedelta,
        now: datetime | None = None,
    ) -> Notification | None:
        """Return a record with the same task notification tuple inside ``window``."""

        if notification.related_task_id is None:
            return None

        reference = now or notification.created_at or now_in_app_timezone()
        since = ensure_app_naive_datetime(reference - window)
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == notification.recipient_id)
            .filter(NotificationModel.event_type == _type_value(notification.event_type))
            .filter(NotificationModel.related_task_id == notification.related_task_id)
            .filter(NotificationModel.created_at >= since)
        )
        if notification.sender_id is None:
            query = query.filter(NotificationModel.sender_id.is_(None))
        else:
            query = query.filter(NotificationModel.sender_id == notification.sender_id)
        model = query.order_by(NotificationModel.created_at.desc()).first()
        return self._to_entity(model) if model else None

    def create(
        self,
        notification: Notification,
        *,
        dedup_window: timedelta | None = None,
    ) -> Notification | None:
        """Persist ``notification`` unless it duplicates a recent one.

        Returns ``None`` when the record was suppressed as a duplicate.
        """

        created_at = notification.created_at or now_in_app_timezone()
        if dedup_window is not None and self.find_recent_duplicate(
            notification, window=dedup_window, now=created_at
        ):
            return None

        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        model.created_at = ensure_app_naive_datetime(created_at)
        if dedup_window is not None and notification.related_task_id is not None:
            model.dedup_bucket = _dedup_bucket(created_at, dedup_window)
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            # Only a concurrent insert hitting the dedup index counts as a duplicate.
            if dedup_window is None or not self.find_recent_duplicate(
                notification, window=dedup_window, now=created_at
            ):
                raise
            logger.info(
                "Duplicate %s notification for recipient %s rejected by the database",
                _type_value(notification.event_type),
                notification.recipient_id,
            )
            return None
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_id: int, *, user_id: int) -> NotificationView | None:
        model = self._get_owned_model(notification_id, user_id)
        if model is None:
            return None
        if not model.is_read:
            model.is_read = True
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_view(model)

    def mark_many_as_read(self, notification_ids: Iterable[int], *, user_id: int) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.recipient_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .update({NotificationModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return int(updated or 0)

    def mark_all_as_read(self, user_id: int) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.recipient_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .update({NotificationModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return int(updated or 0)

    def delete_for_user(self, notification_id: int, *, user_id: int) -> bool:
        model = self._get_owned_model(notification_id, user_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def delete_read(self, user_id: int) -> int:
        deleted = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.recipient_id == user_id,
                NotificationModel.is_read.is_(True),
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return int(deleted or 0)

    def _get_owned_model(self, notification_id: int, user_id: int) -> NotificationModel | None:
        return (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.recipient_id == user_id,
            )
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.recipient_id = notification.recipient_id
        model.sender_id = notification.sender_id
        model.event_type = _type_value(notification.event_type)
        model.title = notification.title
        model.message = notification.message
        model.related_task_id = notification.related_task_id
        model.related_project_id = notification.related_project_id
        model.is_read = notification.is_read
        model.link = notification.link

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            sender_id=model.sender_id,
            event_type=NotificationType(model.event_type),
            title=model.title,
            message=model.message,
            related_task_id=model.related_task_id,
            related_project_id=model.related_project_id,
            is_read=bool(model.is_read),
            link=model.link,
            created_at=ensure_app_timezone(model.created_at),
        )

    @classmethod
    def _to_view(cls, model: NotificationModel) -> NotificationView:
        sender = model.sender
        task = model.related_task
        project = model.related_project
        return NotificationView(
            notification=cls._to_entity(model),
            sender={"id": sender.id, "name": sender.name, "email": sender.email}
            if sender is not None
            else None,
            related_task={"id": task.id, "title": task.title} if task is not None else None,
            related_project={"id": project.id, "name": project.name, "color": project.color}
            if project is not None
            else None,
        )


def _type_value(event_type: NotificationType | str) -> str:
    return event_type.value if isinstance(event_type, NotificationType) else str(event_type)


def _dedup_bucket(created_at: datetime, window: timedelta) -> int:
    seconds = max(int(window.total_seconds()), 1)
    return int(created_at.timestamp() // seconds)


__all__ = ["NotificationRepository"]
