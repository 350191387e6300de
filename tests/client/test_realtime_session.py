"""Tests for routing realtime messages through a client session."""

from __future__ import annotations

from app.client import RealtimeConnection, RealtimeSession


class FakeConnection(RealtimeConnection):
    def __init__(self, *, fail: bool = False) -> None:
        super().__init__()
        self.sent: list[dict] = []
        self.fail = fail

    def send(self, message) -> None:
        if self.fail:
            raise ConnectionError("closed")
        self.sent.append(dict(message))


def _live_session(user_id: int = 1) -> RealtimeSession:
    session = RealtimeSession(user_id)
    session.tasks.load([])
    session.notifications.load([])
    return session


def test_attach_registers_the_user() -> None:
    session = _live_session(user_id=4)
    connection = FakeConnection()

    session.attach(connection)

    assert connection.sent == [{"type": "register", "data": {"user_id": 4}}]
    assert connection.listener_count == 1


def test_reattaching_never_stacks_listeners() -> None:
    session = _live_session()
    first, second = FakeConnection(), FakeConnection()

    session.attach(first)
    session.attach(first)
    session.attach(second)

    assert first.listener_count == 0
    assert second.listener_count == 1
    second.deliver({"type": "task:created", "data": {"id": 1}})
    first.deliver({"type": "task:created", "data": {"id": 2}})
    assert [item["id"] for item in session.tasks.items] == [1]


def test_same_notification_delivered_twice_counts_once() -> None:
    session = _live_session()
    connection = FakeConnection()
    session.attach(connection)
    message = {
        "type": "notification:new",
        "data": {"recipient_id": 1, "notification": {"id": 3, "is_read": False}},
    }

    connection.deliver(message)
    connection.deliver(message)

    assert session.notifications.unread_count == 1
    assert len(session.notifications.items) == 1


def test_init_message_fills_the_inbox_in_server_order() -> None:
    session = _live_session()

    session.handle(
        {
            "type": "init",
            "data": [{"id": 9, "is_read": False}, {"id": 8, "is_read": False}],
        }
    )

    assert [item["id"] for item in session.notifications.items] == [9, 8]
    assert session.notifications.unread_count == 2


def test_comment_events_reach_only_the_open_task() -> None:
    session = _live_session()
    assert session.handle({"type": "comment:created", "data": {"id": 1, "task_id": 5}}) is False

    session.open_task(5, [])
    session.handle({"type": "comment:created", "data": {"id": 1, "task_id": 5}})
    session.handle({"type": "comment:created", "data": {"id": 2, "task_id": 6}})

    assert [item["id"] for item in session.comments.items] == [1]


def test_emit_failures_are_swallowed(caplog) -> None:
    session = _live_session()
    connection = FakeConnection()
    session.attach(connection)
    connection.fail = True

    with caplog.at_level("WARNING"):
        session.emit("task:created", {"id": 1})

    assert "Could not broadcast task:created" in caplog.text


def test_reset_detaches_and_clears_caches() -> None:
    session = _live_session()
    connection = FakeConnection()
    session.attach(connection)
    connection.deliver({"type": "task:created", "data": {"id": 1}})

    session.reset()

    assert connection.listener_count == 0
    assert session.connection is None
    assert session.tasks.is_live is False
    assert session.notifications.is_live is False
