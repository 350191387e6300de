"""Connection management helpers for notification websockets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Dict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Track open websockets and the user identity each one registered as.

    Every accepted socket is kept in ``_connections`` so client broadcasts can
    reach it; only registered sockets appear in the per-user registry used for
    targeted notification delivery.
    """

    def __init__(self) -> None:
        self._connections: Set[WebSocket] = set()
        self._registry: DefaultDict[int, Set[WebSocket]] = defaultdict(set)
        self._identities: Dict[WebSocket, int] = {}

    async def connect(self, websocket: WebSocket) -> None:
        """Accept the websocket connection and keep it as unregistered."""

        await websocket.accept()
        self._connections.add(websocket)

    def register(self, user_id: int, websocket: WebSocket) -> None:
        """Bind ``websocket`` to ``user_id``, moving it if it was bound elsewhere."""

        previous = self._identities.get(websocket)
        if previous is not None and previous != user_id:
            self._forget(previous, websocket)
        self._connections.add(websocket)
        self._registry[user_id].add(websocket)
        self._identities[websocket] = user_id
        logger.info(
            "Registered realtime connection for user %s (%d open)",
            user_id,
            len(self._registry[user_id]),
        )

    def disconnect(self, websocket: WebSocket) -> int | None:
        """Forget ``websocket`` and return the identity it was registered as."""

        self._connections.discard(websocket)
        user_id = self._identities.pop(websocket, None)
        if user_id is not None:
            self._forget(user_id, websocket)
            logger.info("Realtime connection closed for user %s", user_id)
        return user_id

    def identity_of(self, websocket: WebSocket) -> int | None:
        return self._identities.get(websocket)

    def connections_for(self, user_id: int) -> list[WebSocket]:
        return list(self._registry.get(user_id, set()))

    def registered_users(self) -> set[int]:
        return set(self._registry)

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> int:
        """Send ``message`` to every registered connection for ``user_id``."""

        delivered = 0
        for connection in self.connections_for(user_id):
            if await self._send(connection, message):
                delivered += 1
        return delivered

    async def broadcast(
        self, message: dict[str, Any], *, exclude: WebSocket | None = None
    ) -> int:
        """Send ``message`` to every open connection except ``exclude``."""

        delivered = 0
        for connection in list(self._connections):
            if connection is exclude:
                continue
            if await self._send(connection, message):
                delivered += 1
        return delivered

    async def _send(self, connection: WebSocket, message: dict[str, Any]) -> bool:
        try:
            await connection.send_json(message)
        except Exception:  # pragma: no cover - a dead socket is dropped, not fatal
            logger.debug("Dropping realtime connection after failed send", exc_info=True)
            self.disconnect(connection)
            return False
        return True

    def _forget(self, user_id: int, websocket: WebSocket) -> None:
        connections = self._registry.get(user_id)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._registry.pop(user_id, None)


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
