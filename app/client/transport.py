"""Websocket transport that keeps a realtime session subscribed."""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from typing import Any, Mapping
from urllib.parse import urlencode, urlsplit, urlunsplit

from websockets.exceptions import ConnectionClosed, WebSocketException
from websockets.sync.client import connect as websocket_connect

from .session import RealtimeConnection, RealtimeSession

logger = logging.getLogger(__name__)

SOCKET_PATH = "/notifications/ws"
POLICY_VIOLATION = 1008


def build_socket_url(base_url: str, token: str) -> str:
    """Return the websocket URL for ``base_url`` carrying ``token``."""

    parts = urlsplit(base_url)
    scheme = {"http": "ws", "https": "wss"}.get(parts.scheme, parts.scheme)
    path = parts.path.rstrip("/") + SOCKET_PATH
    return urlunsplit((scheme, parts.netloc, path, urlencode({"token": token}), ""))


class WebSocketConnection(RealtimeConnection):
    """One open socket; JSON text frames in and out."""

    def __init__(self, websocket: Any) -> None:
        super().__init__()
        self._websocket = websocket

    def send(self, message: Mapping[str, Any]) -> None:
        self._websocket.send(json.dumps(message))

    def receive_forever(self) -> None:
        """Deliver every inbound message until the server closes the socket."""

        for raw in self._websocket:
            try:
                message = json.loads(raw)
            except ValueError:
                logger.warning("Ignoring malformed realtime message")
                continue
            if isinstance(message, dict):
                self.deliver(message)

    def close(self) -> None:
        self._websocket.close()


class RealtimeSubscriber:
    """Connect ``session`` to the server and reconnect whenever the socket drops.

    Every new socket is handed to :meth:`RealtimeSession.attach`, which drops
    the previous listener and sends ``register`` again.

    Example:
        subscriber = RealtimeSubscriber(session, base_url=client.base_url, token=client.token)
        subscriber.start()
        ...
        subscriber.stop()
    """

    def __init__(
        self,
        session: RealtimeSession,
        *,
        base_url: str,
        token: str,
        reconnect_delay: float = 1.0,
        max_reconnect_delay: float = 30.0,
        connect: Callable[[str], Any] = websocket_connect,
    ) -> None:
        self.session = session
        self.url = build_socket_url(base_url, token)
        self.reconnect_delay = reconnect_delay
        self.max_reconnect_delay = max_reconnect_delay
        self._connect = connect
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None
        self.connection: WebSocketConnection | None = None
        self.rejected = False

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stopped.clear()
        self._thread = threading.Thread(target=self.run, name="taskflow-realtime", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stopped.set()
        if self.connection is not None:
            self.connection.close()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def run(self, *, max_attempts: int | None = None) -> None:
        """Keep the session subscribed until :meth:`stop` or ``max_attempts`` connects.

        Failed connects back off exponentially up to ``max_reconnect_delay``. A
        policy-violation close means the token was refused, so it ends the loop.
        """

        delay = self.reconnect_delay
        attempts = 0
        while not self._stopped.is_set():
            attempts += 1
            connected = self._run_once()
            if self.rejected or self._stopped.is_set():
                break
            if max_attempts is not None and attempts >= max_attempts:
                break
            if connected:
                delay = self.reconnect_delay
            self._stopped.wait(delay)
            if not connected:
                delay = min(delay * 2, self.max_reconnect_delay)
        self.session.detach()
        self.connection = None

    def _run_once(self) -> bool:
        """Open one socket and pump it; return whether it connected."""

        self.connection = None
        try:
            websocket = self._connect(self.url)
        except (OSError, WebSocketException):
            logger.warning("Could not open realtime connection to %s", SOCKET_PATH, exc_info=True)
            return False

        connection = WebSocketConnection(websocket)
        self.connection = connection
        try:
            self.session.attach(connection)
            connection.receive_forever()
        except ConnectionClosed as exc:
            received = exc.rcvd
            if received is not None and received.code == POLICY_VIOLATION:
                logger.error("Realtime server refused the token; not reconnecting")
                self.rejected = True
            else:
                logger.info("Realtime connection closed; reconnecting")
        except (OSError, WebSocketException):
            logger.warning("Realtime connection failed; reconnecting", exc_info=True)
        finally:
            connection.close()
        return True


__all__ = ["RealtimeSubscriber", "WebSocketConnection", "build_socket_url"]
