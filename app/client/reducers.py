"""Pure functions that fold realtime messages into a client-side cache state.

Every function takes a :class:`CacheState` and returns a new one together with
a flag telling whether the message changed anything. States are never
mutated, so the same message applied twice is harmless to reason about.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

CREATED = "created"
UPDATED = "updated"
DELETED = "deleted"
NOTIFICATION_EVENT = "notification:new"

Record = Mapping[str, Any]


@dataclass(frozen=True)
class CacheState:
    """Items newest first, the ids already applied and the unread counter."""

    items: tuple[Record, ...] = ()
    seen: frozenset[Any] = frozenset()
    unread_count: int = 0

    def ids(self) -> list[Any]:
        return [item.get("id") for item in self.items]

    def find(self, record_id: Any) -> Record | None:
        for item in self.items:
            if item.get("id") == record_id:
                return item
        return None


def initial_state(records: list[Record], *, unread_count: int | None = None) -> CacheState:
    """Return the state right after a full fetch; every fetched id counts as applied."""

    items = tuple(dict(record) for record in records)
    if unread_count is None:
        unread_count = sum(1 for item in items if item.get("is_read") is False)
    return CacheState(
        items=items,
        seen=frozenset(item.get("id") for item in items),
        unread_count=unread_count,
    )


def record_id(payload: Any) -> Any:
    """Return the id of a record payload or the payload itself for bare ids."""

    if isinstance(payload, Mapping):
        return payload.get("id")
    return payload


def split_event_type(event_type: str) -> tuple[str, str]:
    entity, _, action = event_type.partition(":")
    return entity, action


def apply_created(state: CacheState, record: Record) -> tuple[CacheState, bool]:
    identity = record.get("id")
    if identity is None or identity in state.seen:
        return state, False
    return (
        replace(state, items=(dict(record), *state.items), seen=state.seen | {identity}),
        True,
    )


def apply_updated(state: CacheState, record: Record) -> tuple[CacheState, bool]:
    identity = record.get("id")
    if identity is None or state.find(identity) is None:
        return state, False
    items = tuple(dict(record) if item.get("id") == identity else item for item in state.items)
    return replace(state, items=items), True


def apply_deleted(state: CacheState, identity: Any) -> tuple[CacheState, bool]:
    existing = state.find(identity)
    if existing is None:
        return state, False
    unread = state.unread_count - (1 if existing.get("is_read") is False else 0)
    items = tuple(item for item in state.items if item.get("id") != identity)
    return replace(state, items=items, unread_count=max(unread, 0)), True


def apply_notification(
    state: CacheState, envelope: Any, *, user_id: Any
) -> tuple[CacheState, bool]:
    """Apply a ``notification:new`` envelope addressed to ``user_id``."""

    if not isinstance(envelope, Mapping):
        return state, False
    if str(envelope.get("recipient_id")) != str(user_id):
        return state, False
    notification = envelope.get("notification")
    if not isinstance(notification, Mapping):
        return state, False

    next_state, applied = apply_created(state, notification)
    if applied and not notification.get("is_read", False):
        next_state = replace(next_state, unread_count=next_state.unread_count + 1)
    return next_state, applied


def _in_scope(payload: Any, scope_field: str | None, scope_value: Any) -> bool:
    if scope_field is None or scope_value is None or not isinstance(payload, Mapping):
        return True
    if scope_field not in payload or payload[scope_field] is None:
        return True
    return payload[scope_field] == scope_value


def apply_event(
    state: CacheState,
    message: Mapping[str, Any],
    *,
    entity: str,
    scope_field: str | None = None,
    scope_value: Any = None,
    user_id: Any = None,
) -> tuple[CacheState, bool]:
    """Fold one ``{"type": ..., "data": ...}`` message into ``state``.

    Messages for another entity, another scope or another recipient leave the
    state untouched, as do creations whose id was already applied.
    """

    event_type = message.get("type")
    if not isinstance(event_type, str):
        return state, False
    payload = message.get("data")

    if event_type == NOTIFICATION_EVENT:
        if entity != "notification":
            return state, False
        return apply_notification(state, payload, user_id=user_id)

    event_entity, action = split_event_type(event_type)
    if event_entity != entity:
        return state, False
    if not _in_scope(payload, scope_field, scope_value):
        # A record moved to another scope leaves this cache.
        if action == UPDATED:
            return apply_deleted(state, record_id(payload))
        return state, False

    if action == CREATED and isinstance(payload, Mapping):
        return apply_created(state, payload)
    if action == UPDATED and isinstance(payload, Mapping):
        return apply_updated(state, payload)
    if action == DELETED:
        return apply_deleted(state, record_id(payload))
    return state, False


def mark_read(state: CacheState, identity: Any) -> CacheState:
    existing = state.find(identity)
    if existing is None or existing.get("is_read"):
        return state
    items = tuple(
        {**item, "is_read": True} if item.get("id") == identity else item for item in state.items
    )
    return replace(state, items=items, unread_count=max(state.unread_count - 1, 0))


def mark_all_read(state: CacheState) -> CacheState:
    return replace(
        state,
        items=tuple({**item, "is_read": True} for item in state.items),
        unread_count=0,
    )


def remove(state: CacheState, identity: Any) -> CacheState:
    """Drop a record locally and forget that it was applied."""

    next_state, _ = apply_deleted(state, identity)
    return replace(next_state, seen=next_state.seen - {identity})


def clear_read(state: CacheState) -> CacheState:
    read_ids = {item.get("id") for item in state.items if item.get("is_read")}
    return replace(
        state,
        items=tuple(item for item in state.items if not item.get("is_read")),
        seen=state.seen - read_ids,
    )
