"""Tests for the REST client driven against the application in-process."""

from __future__ import annotations

import httpx
import pytest

from app.client import NotificationCache, TaskflowClient

PASSWORD = "Secret123"


def test_client_logs_in_and_feeds_the_notification_cache(client, make_user) -> None:
    alice, bob = make_user("Alice"), make_user("Bob")

    with TaskflowClient(client=client) as as_alice:
        as_alice.login(alice.email, PASSWORD)
        task = as_alice.create_task(title="From the SDK", assignee_ids=[bob.id])
        assert [t["id"] for t in as_alice.list_tasks()] == [task["id"]]
        as_alice.update_task(task["id"], priority="high")
        as_alice.create_comment(task["id"], "Kick-off notes")

    with TaskflowClient(client=client) as as_bob:
        as_bob.login(bob.email, PASSWORD)
        inbox = as_bob.list_notifications()
        cache = NotificationCache(user_id=bob.id)
        cache.load(inbox["notifications"], unread_count=inbox["unread_count"])

        assert cache.unread_count == 3
        assert [c["content"] for c in as_bob.list_comments(task["id"])] == ["Kick-off notes"]

        newest = cache.items[0]
        as_bob.mark_read(newest["id"])
        cache.mark_read(newest["id"])
        assert as_bob.list_notifications()["unread_count"] == cache.unread_count == 2

        as_bob.mark_all_read()
        cache.mark_all_read()
        as_bob.clear_read()
        cache.clear_read()
        assert as_bob.list_notifications()["notifications"] == cache.items == []


def test_client_raises_on_http_errors(client, make_user) -> None:
    alice = make_user("Alice")

    with TaskflowClient(client=client) as api:
        with pytest.raises(httpx.HTTPStatusError):
            api.list_tasks()
        api.login(alice.email, PASSWORD)
        with pytest.raises(httpx.HTTPStatusError) as excinfo:
            api.delete_task(12345)

    assert excinfo.value.response.status_code == 404
