"""Tests for folding realtime messages into client cache state."""

from __future__ import annotations

from app.client import reducers


def _notification(notification_id, *, is_read=False):
    return {"id": notification_id, "title": "New Task Assigned", "is_read": is_read}


def _envelope(notification_id, recipient_id=7, *, is_read=False):
    return {
        "type": "notification:new",
        "data": {
            "recipient_id": recipient_id,
            "notification": _notification(notification_id, is_read=is_read),
        },
    }


def test_initial_state_counts_unread_and_marks_ids_as_seen() -> None:
    state = reducers.initial_state([_notification(1), _notification(2, is_read=True)])

    assert state.unread_count == 1
    assert state.seen == frozenset({1, 2})


def test_notification_applied_twice_changes_state_once() -> None:
    state = reducers.initial_state([])

    once, applied = reducers.apply_event(state, _envelope(5), entity="notification", user_id=7)
    twice, applied_again = reducers.apply_event(
        once, _envelope(5), entity="notification", user_id=7
    )

    assert applied is True
    assert applied_again is False
    assert twice == once
    assert once.ids() == [5]
    assert once.unread_count == 1


def test_notification_for_another_user_is_ignored() -> None:
    state = reducers.initial_state([])

    result, applied = reducers.apply_event(
        state, _envelope(5, recipient_id=8), entity="notification", user_id=7
    )

    assert applied is False
    assert result == state


def test_recipient_match_tolerates_string_ids() -> None:
    state = reducers.initial_state([])

    result, applied = reducers.apply_event(
        state, _envelope(5, recipient_id="7"), entity="notification", user_id=7
    )

    assert applied is True
    assert result.unread_count == 1


def test_already_read_notification_does_not_raise_the_counter() -> None:
    state = reducers.initial_state([])

    result, _ = reducers.apply_event(
        state, _envelope(9, is_read=True), entity="notification", user_id=7
    )

    assert result.unread_count == 0
    assert result.ids() == [9]


def test_created_task_is_prepended_and_deduplicated() -> None:
    state = reducers.initial_state([{"id": 1, "title": "Old"}])
    message = {"type": "task:created", "data": {"id": 2, "title": "New"}}

    state, applied = reducers.apply_event(state, message, entity="task")
    state, applied_again = reducers.apply_event(state, message, entity="task")

    assert (applied, applied_again) == (True, False)
    assert state.ids() == [2, 1]


def test_update_replaces_in_place_and_ignores_unknown_records() -> None:
    state = reducers.initial_state([{"id": 1, "title": "Old"}, {"id": 2, "title": "Other"}])

    state, applied = reducers.apply_event(
        state, {"type": "task:updated", "data": {"id": 1, "title": "Renamed"}}, entity="task"
    )
    unchanged, applied_unknown = reducers.apply_event(
        state, {"type": "task:updated", "data": {"id": 3, "title": "Ghost"}}, entity="task"
    )

    assert applied is True
    assert state.find(1)["title"] == "Renamed"
    assert state.ids() == [1, 2]
    assert applied_unknown is False
    assert unchanged == state


def test_delete_accepts_bare_ids_and_is_idempotent() -> None:
    state = reducers.initial_state([{"id": 1}, {"id": 2}])

    state, applied = reducers.apply_event(state, {"type": "task:deleted", "data": 1}, entity="task")
    state, applied_again = reducers.apply_event(
        state, {"type": "task:deleted", "data": {"id": 1}}, entity="task"
    )

    assert (applied, applied_again) == (True, False)
    assert state.ids() == [2]


def test_events_outside_the_scope_are_ignored() -> None:
    state = reducers.initial_state([])
    other_project = {"type": "task:created", "data": {"id": 4, "project_id": 2}}
    same_project = {"type": "task:created", "data": {"id": 5, "project_id": 1}}

    state, applied_other = reducers.apply_event(
        state, other_project, entity="task", scope_field="project_id", scope_value=1
    )
    state, applied_same = reducers.apply_event(
        state, same_project, entity="task", scope_field="project_id", scope_value=1
    )

    assert (applied_other, applied_same) == (False, True)
    assert state.ids() == [5]


def test_events_for_other_entities_are_ignored() -> None:
    state = reducers.initial_state([{"id": 1}])

    result, applied = reducers.apply_event(
        state, {"type": "comment:deleted", "data": 1}, entity="task"
    )

    assert applied is False
    assert result.ids() == [1]


def test_local_inbox_mutations_keep_the_counter_consistent() -> None:
    state = reducers.initial_state([_notification(1), _notification(2), _notification(3)])

    state = reducers.mark_read(state, 1)
    state = reducers.mark_read(state, 1)
    assert state.unread_count == 2

    state = reducers.remove(state, 2)
    assert state.unread_count == 1
    assert 2 not in state.seen

    state = reducers.clear_read(state)
    assert state.ids() == [3]

    state = reducers.mark_all_read(state)
    assert state.unread_count == 0
    assert state.find(3)["is_read"] is True


def test_task_moved_to_another_project_leaves_the_scoped_cache() -> None:
    state = reducers.initial_state([{"id": 5, "project_id": 1}, {"id": 6, "project_id": 1}])
    moved = {"type": "task:updated", "data": {"id": 5, "project_id": 2}}
    unknown = {"type": "task:updated", "data": {"id": 9, "project_id": 2}}

    state, applied_moved = reducers.apply_event(
        state, moved, entity="task", scope_field="project_id", scope_value=1
    )
    state, applied_unknown = reducers.apply_event(
        state, unknown, entity="task", scope_field="project_id", scope_value=1
    )

    assert (applied_moved, applied_unknown) == (True, False)
    assert state.ids() == [6]
