"""Tests for the notification inbox endpoints."""

from __future__ import annotations


def _assign(client, auth_headers, owner, assignee, title):
    response = client.post(
        "/tasks/",
        json={"title": title, "assignee_ids": [assignee.id]},
        headers=auth_headers(owner),
    )
    assert response.status_code == 201
    return response.json()


def test_assignment_round_trip(client, make_user, auth_headers) -> None:
    alice, bob = make_user("Alice"), make_user("Bob")
    task = _assign(client, auth_headers, alice, bob, "Write docs")

    inbox = client.get("/notifications/", headers=auth_headers(bob)).json()
    assert inbox["unread_count"] == 1
    (notification,) = inbox["notifications"]
    assert notification["event_type"] == "task_assigned"
    assert notification["recipient_id"] == bob.id
    assert notification["sender"]["name"] == "Alice"
    assert notification["related_task"] == {"id": task["id"], "title": "Write docs"}
    assert notification["is_read"] is False

    assert client.get("/notifications/", headers=auth_headers(alice)).json() == {
        "notifications": [],
        "unread_count": 0,
    }

    marked = client.put(
        f"/notifications/{notification['id']}/read", headers=auth_headers(bob)
    )
    assert marked.status_code == 200
    assert marked.json()["is_read"] is True

    again = client.put(f"/notifications/{notification['id']}/read", headers=auth_headers(bob))
    assert again.status_code == 200

    inbox = client.get("/notifications/", headers=auth_headers(bob)).json()
    assert inbox["unread_count"] == 0
    assert inbox["notifications"][0]["is_read"] is True


def test_other_users_notifications_are_not_found(client, make_user, auth_headers) -> None:
    alice, bob = make_user("Alice"), make_user("Bob")
    _assign(client, auth_headers, alice, bob, "Private")
    notification_id = client.get("/notifications/", headers=auth_headers(bob)).json()[
        "notifications"
    ][0]["id"]

    assert (
        client.put(f"/notifications/{notification_id}/read", headers=auth_headers(alice))
    ).status_code == 404
    assert (
        client.delete(f"/notifications/{notification_id}", headers=auth_headers(alice))
    ).status_code == 404


def test_read_all_batch_read_and_clear(client, make_user, auth_headers) -> None:
    alice, bob = make_user("Alice"), make_user("Bob")
    for title in ("One", "Two", "Three"):
        _assign(client, auth_headers, alice, bob, title)

    inbox = client.get("/notifications/", headers=auth_headers(bob)).json()
    assert inbox["unread_count"] == 3
    newest = inbox["notifications"][0]

    batch = client.put(
        "/notifications/read",
        json={"ids": [newest["id"], newest["id"]]},
        headers=auth_headers(bob),
    )
    assert batch.json() == {"updated": 1, "unread_count": 2}

    unread = client.get(
        "/notifications/", params={"unread_only": True}, headers=auth_headers(bob)
    ).json()
    assert len(unread["notifications"]) == 2

    everything = client.put("/notifications/read-all", headers=auth_headers(bob))
    assert everything.json() == {"updated": 2, "unread_count": 0}

    cleared = client.delete("/notifications/read", headers=auth_headers(bob))
    assert cleared.status_code == 200
    assert client.get("/notifications/", headers=auth_headers(bob)).json()["notifications"] == []


def test_delete_single_notification(client, make_user, auth_headers) -> None:
    alice, bob = make_user("Alice"), make_user("Bob")
    _assign(client, auth_headers, alice, bob, "Tidy")
    notification_id = client.get("/notifications/", headers=auth_headers(bob)).json()[
        "notifications"
    ][0]["id"]

    response = client.delete(f"/notifications/{notification_id}", headers=auth_headers(bob))

    assert response.status_code == 200
    assert client.get("/notifications/", headers=auth_headers(bob)).json()["unread_count"] == 0


def test_limit_is_bounded(client, make_user, auth_headers) -> None:
    bob = make_user("Bob")

    assert (
        client.get("/notifications/", params={"limit": 0}, headers=auth_headers(bob))
    ).status_code == 422
    assert (
        client.get("/notifications/", params={"limit": 101}, headers=auth_headers(bob))
    ).status_code == 422
