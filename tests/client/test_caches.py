"""Tests for the client caches and their message queue."""

from __future__ import annotations

import asyncio

from app.client import CommentCache, NotificationCache, TaskCache


def _notification_message(notification_id, recipient_id=1):
    return {
        "type": "notification:new",
        "data": {
            "recipient_id": recipient_id,
            "notification": {"id": notification_id, "is_read": False},
        },
    }


def test_messages_before_the_initial_fetch_are_dropped() -> None:
    cache = TaskCache()

    assert cache.dispatch({"type": "task:created", "data": {"id": 1}}) is False
    assert cache.is_live is False

    cache.load([])
    assert cache.dispatch({"type": "task:created", "data": {"id": 1}}) is True
    assert [item["id"] for item in cache.items] == [1]


def test_fetched_records_are_not_applied_again() -> None:
    cache = TaskCache()
    cache.load([{"id": 1, "title": "Fetched"}])

    assert cache.dispatch({"type": "task:created", "data": {"id": 1, "title": "Echo"}}) is False
    assert cache.items == [{"id": 1, "title": "Fetched"}]


def test_comment_cache_only_accepts_its_task() -> None:
    cache = CommentCache(task_id=3)
    cache.load([])

    cache.dispatch({"type": "comment:created", "data": {"id": 1, "task_id": 4}})
    cache.dispatch({"type": "comment:created", "data": {"id": 2, "task_id": 3}})

    assert cache.task_id == 3
    assert [item["id"] for item in cache.items] == [2]


def test_notification_cache_counts_unread_once() -> None:
    cache = NotificationCache(user_id=1)
    cache.load([], unread_count=4)

    cache.dispatch(_notification_message(10))
    cache.dispatch(_notification_message(10))
    cache.dispatch(_notification_message(11, recipient_id=2))

    assert cache.unread_count == 5
    cache.mark_read(10)
    assert cache.unread_count == 4
    cache.mark_all_read()
    assert cache.unread_count == 0


def test_local_mutations_are_ignored_before_load() -> None:
    cache = NotificationCache(user_id=1)

    cache.mark_all_read()
    cache.remove(1)

    assert cache.is_live is False


def test_reset_forgets_applied_ids() -> None:
    cache = NotificationCache(user_id=1)
    cache.load([])
    cache.dispatch(_notification_message(10))

    cache.reset()
    cache.load([])

    assert cache.dispatch(_notification_message(10)) is True


def test_queued_messages_are_applied_in_order() -> None:
    async def scenario() -> list[int]:
        cache = TaskCache()
        cache.load([])
        consumer = asyncio.create_task(cache.run())
        cache.publish({"type": "task:created", "data": {"id": 1}})
        cache.publish({"type": "task:created", "data": {"id": 2}})
        cache.publish({"type": "task:created", "data": {"id": 1}})
        cache.publish({"type": "task:deleted", "data": 1})
        await cache.drain()
        consumer.cancel()
        return [item["id"] for item in cache.items]

    assert asyncio.run(scenario()) == [2]
