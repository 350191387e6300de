"""Tests for the websocket transport and its reconnect loop."""

from __future__ import annotations

import json

import pytest

from app.client import (
    RealtimeConnection,
    RealtimeSession,
    RealtimeSubscriber,
    WebSocketConnection,
    build_socket_url,
)


class FakeSocket:
    def __init__(self, frames: list[str]) -> None:
        self.frames = frames
        self.sent: list[dict] = []
        self.closed = False

    def __iter__(self):
        return iter(self.frames)

    def send(self, text: str) -> None:
        self.sent.append(json.loads(text))

    def close(self) -> None:
        self.closed = True


def _frame(message: dict) -> str:
    return json.dumps(message)


def _notification(notification_id: int, recipient_id: int = 1) -> dict:
    return {
        "type": "notification:new",
        "data": {
            "recipient_id": recipient_id,
            "notification": {"id": notification_id, "is_read": False},
        },
    }


def _live_session(user_id: int = 1) -> RealtimeSession:
    session = RealtimeSession(user_id)
    session.tasks.load([])
    session.notifications.load([])
    return session


@pytest.mark.parametrize(
    "base_url, expected",
    [
        ("http://localhost:8000", "ws://localhost:8000/notifications/ws?token=abc"),
        ("https://api.example.com/v1/", "wss://api.example.com/v1/notifications/ws?token=abc"),
    ],
)
def test_socket_url_carries_the_token(base_url, expected) -> None:
    assert build_socket_url(base_url, "abc") == expected


def test_connection_base_class_requires_send() -> None:
    with pytest.raises(TypeError):
        RealtimeConnection()


def test_connection_delivers_json_frames_and_skips_garbage() -> None:
    socket = FakeSocket([_frame({"type": "task:created", "data": {"id": 1}}), "not json", "[]"])
    connection = WebSocketConnection(socket)
    received: list = []
    connection.add_listener(received.append)

    connection.receive_forever()
    connection.send({"type": "ping"})

    assert received == [{"type": "task:created", "data": {"id": 1}}]
    assert socket.sent == [{"type": "ping"}]


def test_every_reconnect_registers_again_and_moves_the_listener() -> None:
    session = _live_session(user_id=1)
    first = FakeSocket([_frame(_notification(1))])
    second = FakeSocket([_frame(_notification(1)), _frame(_notification(2))])
    sockets = [first, second]
    urls: list[str] = []

    def connect(url: str) -> FakeSocket:
        urls.append(url)
        return sockets.pop(0)

    subscriber = RealtimeSubscriber(
        session,
        base_url="http://localhost:8000",
        token="tok",
        reconnect_delay=0,
        connect=connect,
    )

    subscriber.run(max_attempts=2)

    assert urls == ["ws://localhost:8000/notifications/ws?token=tok"] * 2
    register = {"type": "register", "data": {"user_id": 1}}
    assert first.sent == [register]
    assert second.sent == [register]
    assert first.closed and second.closed
    assert [item["id"] for item in session.notifications.items] == [2, 1]
    assert session.notifications.unread_count == 2
    assert session.connection is None


def test_failed_connect_is_retried(caplog) -> None:
    session = _live_session()
    socket = FakeSocket([_frame(_notification(5))])
    attempts: list[str] = []

    def connect(url: str) -> FakeSocket:
        attempts.append(url)
        if len(attempts) == 1:
            raise ConnectionRefusedError("server down")
        return socket

    subscriber = RealtimeSubscriber(
        session, base_url="http://localhost:8000", token="tok", reconnect_delay=0, connect=connect
    )

    with caplog.at_level("WARNING"):
        subscriber.run(max_attempts=2)

    assert len(attempts) == 2
    assert "Could not open realtime connection" in caplog.text
    assert [item["id"] for item in session.notifications.items] == [5]
