"""Tests for registration, email verification and login."""

from __future__ import annotations

import importlib
from urllib.parse import parse_qs, urlsplit

import pytest

from app.config import Settings

register_module = importlib.import_module("app.application.use_cases.users.register_user")
verify_module = importlib.import_module("app.application.use_cases.users.verify_email")


@pytest.fixture()
def outbox(monkeypatch: pytest.MonkeyPatch) -> list[tuple[str, str]]:
    """Enable email delivery and capture verification links instead of sending them."""

    sent: list[tuple[str, str]] = []
    settings = Settings(sendgrid_api_key="SG.fake", sendgrid_sender="noreply@example.com")

    def fake_send(email: str, url: str) -> bool:
        sent.append((email, url))
        return True

    monkeypatch.setattr(register_module, "get_settings", lambda: settings)
    monkeypatch.setattr(register_module, "send_verification_email", fake_send)
    monkeypatch.setattr(verify_module, "send_verification_email", fake_send)
    return sent


def _token_from(url: str) -> str:
    fragment = urlsplit(url).fragment
    return parse_qs(urlsplit(fragment).query)["token"][0]


def test_registration_without_email_delivery_allows_login(client) -> None:
    response = client.post(
        "/auth/register",
        json={"name": "Ana", "email": "Ana@Example.com", "password": "secret1"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["requires_verification"] is False
    assert body["user"]["email"] == "ana@example.com"

    login = client.post("/auth/login", json={"email": "ana@example.com", "password": "secret1"})
    assert login.status_code == 200
    token = login.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["name"] == "Ana"


def test_unverified_user_cannot_log_in_until_verified(client, outbox) -> None:
    payload = {"name": "Ben", "email": "ben@example.com", "password": "secret1"}

    response = client.post("/auth/register", json=payload)
    assert response.status_code == 201
    assert response.json()["requires_verification"] is True
    assert len(outbox) == 1

    blocked = client.post("/auth/login", json={"email": payload["email"], "password": "secret1"})
    assert blocked.status_code == 403

    verified = client.post("/auth/verify-email", json={"token": _token_from(outbox[0][1])})
    assert verified.status_code == 200
    assert verified.json()["access_token"]
    assert verified.json()["user"]["email_verified"] is True

    allowed = client.post("/auth/login", json={"email": payload["email"], "password": "secret1"})
    assert allowed.status_code == 200


def test_resend_verification_issues_a_new_link(client, outbox) -> None:
    client.post(
        "/auth/register",
        json={"name": "Cal", "email": "cal@example.com", "password": "secret1"},
    )

    response = client.post("/auth/resend-verification", json={"email": "cal@example.com"})

    assert response.status_code == 200
    assert len(outbox) == 2
    assert _token_from(outbox[0][1]) != _token_from(outbox[1][1])

    stale = client.post("/auth/verify-email", json={"token": _token_from(outbox[0][1])})
    assert stale.status_code == 400


def test_failed_verification_email_rolls_the_account_back(client, monkeypatch, outbox) -> None:
    monkeypatch.setattr(register_module, "send_verification_email", lambda email, url: False)
    payload = {"name": "Dee", "email": "dee@example.com", "password": "secret1"}

    response = client.post("/auth/register", json=payload)
    assert response.status_code == 503

    monkeypatch.setattr(register_module, "send_verification_email", lambda email, url: True)
    retry = client.post("/auth/register", json=payload)
    assert retry.status_code == 201


def test_duplicate_email_and_bad_credentials(client, make_user) -> None:
    user = make_user("Eve")

    duplicate = client.post(
        "/auth/register",
        json={"name": "Eve", "email": user.email, "password": "secret1"},
    )
    assert duplicate.status_code == 400

    wrong = client.post("/auth/login", json={"email": user.email, "password": "nope"})
    assert wrong.status_code == 401

    form = client.post("/auth/token", data={"username": user.email, "password": "Secret123"})
    assert form.status_code == 200
    assert form.json()["token_type"] == "bearer"


def test_requests_without_a_valid_token_are_rejected(client) -> None:
    assert client.get("/tasks/").status_code == 401
    assert (
        client.get("/tasks/", headers={"Authorization": "Bearer not-a-token"}).status_code == 401
    )


def test_user_search_excludes_the_caller(client, make_user, auth_headers) -> None:
    alice = make_user("Alice Smith")
    make_user("Alina Stone")

    short = client.get("/auth/search", params={"q": "a"}, headers=auth_headers(alice))
    found = client.get("/auth/search", params={"q": "ali"}, headers=auth_headers(alice))

    assert short.json() == []
    assert [user["name"] for user in found.json()] == ["Alina Stone"]
