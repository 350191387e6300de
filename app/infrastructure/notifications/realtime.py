"""Helpers to relay client domain events to the other connected clients."""

from __future__ import annotations

import copy
import logging
from typing import Any

from fastapi import WebSocket

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)

DOMAIN_EVENT_TYPES: frozenset[str] = frozenset(
    {
        "task:created",
        "task:updated",
        "task:deleted",
        "comment:created",
        "comment:updated",
        "comment:deleted",
        "project:created",
        "project:updated",
    }
)


class DomainEventRelay:
    """Forward ``task:*``, ``comment:*`` and ``project:*`` messages verbatim.

    The server does not interpret the payload; it is the created or updated
    record, or the id of a deleted one. The sending socket never receives its
    own event back.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    @staticmethod
    def is_domain_event(message: Any) -> bool:
        return isinstance(message, dict) and message.get("type") in DOMAIN_EVENT_TYPES

    async def relay(self, sender: WebSocket, message: dict[str, Any]) -> int:
        """Send ``message`` to every connection except ``sender``."""

        if not self.is_domain_event(message):
            raise ValueError(f"Not a relayable event: {message.get('type')!r}")

        outgoing = {"type": message["type"], "data": copy.deepcopy(message.get("data"))}
        delivered = await self._manager.broadcast(outgoing, exclude=sender)
        logger.debug("Relayed %s to %d connection(s)", outgoing["type"], delivered)
        return delivered


domain_event_relay = DomainEventRelay(notification_manager)


__all__ = ["DOMAIN_EVENT_TYPES", "DomainEventRelay", "domain_event_relay"]
