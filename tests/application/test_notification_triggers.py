"""Tests for who is notified when tasks, comments and projects change."""

from __future__ import annotations

from app.application.use_cases.comments import create_comment
from app.application.use_cases.notifications import (
    list_notifications,
    notify_project_member_added,
    resolve_recipients,
)
from app.application.use_cases.projects import add_member
from app.application.use_cases.tasks import create_task, reorder_tasks, update_task
from app.domain.entities import NotificationType
from app.infrastructure.repositories import NotificationRepository


def _received(sent, recipient_id):
    return [
        view.notification.event_type
        for view in sent
        if view.notification.recipient_id == recipient_id
    ]


def test_resolve_recipients_drops_actor_blanks_and_repeats() -> None:
    assert resolve_recipients([3, None, 1, 3, 2, 0, 1], actor_id=2) == [3, 1]


def test_creating_a_task_notifies_every_assignee_but_the_creator(
    session, make_user, sent_notifications
) -> None:
    alice, bob, carol = make_user("Alice"), make_user("Bob"), make_user("Carol")

    task = create_task(
        session,
        user_id=alice.id,
        title="Prepare demo",
        assignee_ids=[bob.id, carol.id, alice.id],
    )

    assert sorted(view.notification.recipient_id for view in sent_notifications) == sorted(
        [bob.id, carol.id]
    )
    first = sent_notifications[0].notification
    assert first.event_type is NotificationType.TASK_ASSIGNED
    assert first.sender_id == alice.id
    assert first.related_task_id == task.id
    assert first.title == "New Task Assigned"
    assert first.message == 'You have been assigned to "Prepare demo"'
    assert first.link == f"/dashboard?task={task.id}"
    assert _received(sent_notifications, alice.id) == []


def test_reassignment_notifies_only_added_assignees_and_updates_everyone(
    session, make_user, sent_notifications
) -> None:
    alice, bob, carol, dave = (make_user(name) for name in ("Alice", "Bob", "Carol", "Dave"))
    task = create_task(
        session, user_id=alice.id, title="Ship", assignee_ids=[bob.id, carol.id]
    )
    sent_notifications.clear()

    update_task(
        session,
        task_id=task.id,
        user_id=alice.id,
        changes={"assignee_ids": [bob.id, dave.id]},
    )

    assert _received(sent_notifications, dave.id) == [
        NotificationType.TASK_ASSIGNED,
        NotificationType.TASK_UPDATED,
    ]
    assert _received(sent_notifications, bob.id) == [NotificationType.TASK_UPDATED]
    assert _received(sent_notifications, carol.id) == [NotificationType.TASK_UPDATED]
    assert _received(sent_notifications, alice.id) == []


def test_assignee_completing_a_task_notifies_creator_and_other_assignees(
    session, make_user, sent_notifications
) -> None:
    alice, bob, carol = make_user("Alice"), make_user("Bob"), make_user("Carol")
    task = create_task(
        session, user_id=alice.id, title="Review", assignee_ids=[bob.id, carol.id]
    )
    sent_notifications.clear()

    update_task(session, task_id=task.id, user_id=bob.id, changes={"status": "completed"})

    expected = [NotificationType.TASK_UPDATED, NotificationType.TASK_COMPLETED]
    assert _received(sent_notifications, alice.id) == expected
    assert _received(sent_notifications, carol.id) == expected
    assert _received(sent_notifications, bob.id) == []


def test_reordering_tasks_sends_nothing(session, make_user, sent_notifications) -> None:
    alice, bob = make_user("Alice"), make_user("Bob")
    task = create_task(session, user_id=alice.id, title="Sort", assignee_ids=[bob.id])
    sent_notifications.clear()

    reorder_tasks(session, user_id=alice.id, items=[(task.id, 3, "in-progress")])

    assert sent_notifications == []


def test_comment_notifies_participants_except_the_author(
    session, make_user, sent_notifications
) -> None:
    alice, bob, carol = make_user("Alice"), make_user("Bob"), make_user("Carol")
    task = create_task(
        session, user_id=alice.id, title="Discuss", assignee_ids=[bob.id, carol.id]
    )
    sent_notifications.clear()

    create_comment(session, task_id=task.id, user_id=bob.id, content="Looks good")

    assert _received(sent_notifications, alice.id) == [NotificationType.COMMENT_ADDED]
    assert _received(sent_notifications, carol.id) == [NotificationType.COMMENT_ADDED]
    assert _received(sent_notifications, bob.id) == []
    assert sent_notifications[0].notification.message == 'New comment on "Discuss"'


def test_comment_by_the_only_participant_notifies_nobody(
    session, make_user, sent_notifications
) -> None:
    alice = make_user("Alice")
    task = create_task(session, user_id=alice.id, title="Solo")

    create_comment(session, task_id=task.id, user_id=alice.id, content="Note to self")

    assert sent_notifications == []
    notifications, unread = list_notifications(session, user_id=alice.id)
    assert list(notifications) == []
    assert unread == 0


def test_adding_a_project_member_notifies_them(
    session, make_user, make_project, sent_notifications
) -> None:
    alice, bob = make_user("Alice"), make_user("Bob")
    project = make_project(alice, name="Website")

    add_member(session, project_id=project.id, member_id=bob.id, added_by=alice.id)
    add_member(session, project_id=project.id, member_id=bob.id, added_by=alice.id)

    assert len(sent_notifications) == 1
    notification = sent_notifications[0].notification
    assert notification.recipient_id == bob.id
    assert notification.event_type is NotificationType.PROJECT_ADDED
    assert notification.related_project_id == project.id
    assert notification.related_task_id is None
    assert notification.message == 'You have been added to "Website"'


def test_adding_yourself_to_a_project_sends_nothing(
    session, make_user, make_project, sent_notifications
) -> None:
    alice = make_user("Alice")
    project = make_project(alice)

    created = notify_project_member_added(
        session, project=project, new_member_id=alice.id, added_by=alice.id
    )

    assert created == []
    assert sent_notifications == []


def test_rapid_duplicate_comments_notify_each_participant_once(
    session, make_user, sent_notifications
) -> None:
    alice, bob = make_user("Alice"), make_user("Bob")
    task = create_task(session, user_id=alice.id, title="Chatty", assignee_ids=[bob.id])
    sent_notifications.clear()

    create_comment(session, task_id=task.id, user_id=bob.id, content="Ping")
    create_comment(session, task_id=task.id, user_id=bob.id, content="Ping again")

    assert _received(sent_notifications, alice.id) == [NotificationType.COMMENT_ADDED]
    _, unread = list_notifications(session, user_id=alice.id)
    assert unread == 1


def test_editor_who_is_creator_and_assignee_is_never_notified(
    session, make_user, sent_notifications
) -> None:
    alice, bob = make_user("Alice"), make_user("Bob")
    task = create_task(
        session, user_id=alice.id, title="Self", assignee_ids=[alice.id, bob.id]
    )
    sent_notifications.clear()

    update_task(session, task_id=task.id, user_id=alice.id, changes={"priority": "high"})

    assert _received(sent_notifications, alice.id) == []
    assert _received(sent_notifications, bob.id) == [NotificationType.TASK_UPDATED]


def test_one_failing_recipient_does_not_stop_the_others(
    session, make_user, sent_notifications, monkeypatch
) -> None:
    alice, bob, carol = make_user("Alice"), make_user("Bob"), make_user("Carol")
    task = create_task(
        session, user_id=alice.id, title="Fragile", assignee_ids=[bob.id, carol.id]
    )
    sent_notifications.clear()
    original_create = NotificationRepository.create

    def create_failing_for_bob(self, notification, **kwargs):
        if notification.recipient_id == bob.id:
            raise RuntimeError("disk full")
        return original_create(self, notification, **kwargs)

    monkeypatch.setattr(NotificationRepository, "create", create_failing_for_bob)

    update_task(session, task_id=task.id, user_id=alice.id, changes={"priority": "low"})

    assert _received(sent_notifications, bob.id) == []
    assert _received(sent_notifications, carol.id) == [NotificationType.TASK_UPDATED]
    _, carol_unread = list_notifications(session, user_id=carol.id)
    assert carol_unread == 1
