"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
)
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    clear_read_notifications,
    delete_notification as delete_notification_uc,
    list_notifications as list_notifications_uc,
    list_unread_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    mark_notifications_read,
)
from app.domain.entities import User
from app.infrastructure.database import SessionLocal, get_db
from app.infrastructure.notifications import (
    domain_event_relay,
    notification_manager,
    serialize_notification,
)
from app.infrastructure.repositories import NotificationRepository
from app.interfaces.api.dependencies import get_current_user, resolve_current_user
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.presenters import notification_read
from app.interfaces.api.schemas import (
    MessageResponse,
    NotificationCountRead,
    NotificationListRead,
    NotificationMarkReadRequest,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

POLICY_VIOLATION = 1008


@router.get("/", response_model=NotificationListRead)
def list_notifications(
    unread_only: bool = False,
    limit: int = Query(default=20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationListRead:
    """Return the most recent notifications and the unread count."""

    notifications, unread_count = list_notifications_uc(
        db, user_id=current_user.id, unread_only=unread_only, limit=limit
    )
    return NotificationListRead(
        notifications=[notification_read(view) for view in notifications],
        unread_count=unread_count,
    )


@router.put("/read-all", response_model=NotificationCountRead)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationCountRead:
    updated = mark_all_notifications_read(db, user_id=current_user.id)
    return NotificationCountRead(updated=updated, unread_count=0)


@router.put("/read", response_model=NotificationCountRead)
def mark_read_batch(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationCountRead:
    """Mark several notifications as read in one call."""

    updated = mark_notifications_read(
        db, notification_ids=payload.unique_ids(), user_id=current_user.id
    )
    unread = NotificationRepository(db).count_unread(current_user.id)
    return NotificationCountRead(updated=updated, unread_count=unread)


@router.delete("/read", response_model=MessageResponse)
def clear_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    deleted = clear_read_notifications(db, user_id=current_user.id)
    return MessageResponse(message=f"Deleted {deleted} read notification(s)")


@router.put("/{notification_id}/read", response_model=NotificationRead)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    try:
        view = mark_notification_read(
            db, notification_id=notification_id, user_id=current_user.id
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return notification_read(view)


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    try:
        delete_notification_uc(db, notification_id=notification_id, user_id=current_user.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Notification deleted")


def _authenticate_socket(token: str) -> User | None:
    session = SessionLocal()
    try:
        return resolve_current_user(token, session)
    except HTTPException:
        return None
    finally:
        session.close()


def _unread_payload(user_id: int) -> list[dict[str, Any]]:
    session = SessionLocal()
    try:
        return [serialize_notification(view) for view in list_unread_notifications(session, user_id=user_id)]
    finally:
        session.close()


def _acknowledge(user_id: int, ids: list[int]) -> int:
    session = SessionLocal()
    try:
        return mark_notifications_read(session, notification_ids=ids, user_id=user_id)
    finally:
        session.close()


def _registration_target(message: dict[str, Any]) -> Any:
    data = message.get("data")
    if isinstance(data, dict):
        return data.get("user_id")
    return message.get("user_id")


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Realtime channel: registration, domain event relay and notification push.

    The socket must present a valid token in the query string. It only
    receives ``notification:new`` messages once it has registered as the
    token's user; domain events from other clients reach it right away.
    """

    token = websocket.query_params.get("token")
    user = _authenticate_socket(token) if token else None
    if user is None:
        await websocket.close(code=POLICY_VIOLATION)
        return

    await notification_manager.connect(websocket)
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                await websocket.send_json({"type": "error", "data": {"detail": "Invalid JSON"}})
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "register":
                target = _registration_target(message)
                if target != user.id:
                    await websocket.send_json(
                        {
                            "type": "error",
                            "data": {"detail": "Cannot register as another user"},
                        }
                    )
                    continue
                notification_manager.register(user.id, websocket)
                await websocket.send_json({"type": "init", "data": _unread_payload(user.id)})
                await websocket.send_json({"type": "registered", "data": {"user_id": user.id}})
                continue

            if message_type == "ack":
                data = message.get("data")
                ids = data.get("ids") if isinstance(data, dict) else message.get("ids")
                if isinstance(ids, list) and ids:
                    _acknowledge(user.id, [i for i in ids if isinstance(i, int)])
                continue

            if domain_event_relay.is_domain_event(message):
                await domain_event_relay.relay(websocket, message)
                continue

            logger.debug("Ignoring realtime message of type %r", message_type)
    except WebSocketDisconnect:
        pass
    finally:
        notification_manager.disconnect(websocket)
