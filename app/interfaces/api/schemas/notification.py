"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int] = Field(..., min_length=1)

    def unique_ids(self) -> list[int]:
        """Return the list of identifiers without duplicates preserving order."""

        return list(dict.fromkeys(self.ids))


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    recipient_id: int
    sender_id: int | None = None
    sender: dict[str, Any] | None = None
    event_type: str
    title: str
    message: str
    related_task_id: int | None = None
    related_task: dict[str, Any] | None = None
    related_project_id: int | None = None
    related_project: dict[str, Any] | None = None
    is_read: bool
    link: str | None = None
    created_at: datetime | None = None


class NotificationListRead(BaseModel):
    notifications: list[NotificationRead]
    unread_count: int


class NotificationCountRead(BaseModel):
    updated: int = 0
    unread_count: int


__all__ = [
    "NotificationCountRead",
    "NotificationListRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
]
