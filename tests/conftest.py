"""Shared fixtures: an isolated SQLite database and helpers to create data."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / "taskflow_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from app.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from fastapi.testclient import TestClient  # noqa: E402

from app.domain.entities import DEFAULT_PROJECT_COLOR, Project, Task, User  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.repositories import (  # noqa: E402
    ProjectRepository,
    TaskRepository,
    UserRepository,
)
from app.infrastructure.security import create_access_token, get_password_hash  # noqa: E402
from app.utils import now_in_app_timezone  # noqa: E402

DEFAULT_PASSWORD = "Secret123"


@pytest.fixture(autouse=True)
def reset_database():
    """Start every test from empty tables."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


@pytest.fixture()
def client():
    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def sent_notifications(monkeypatch: pytest.MonkeyPatch) -> list:
    """Capture broadcasts made by the emitter instead of pushing them."""

    captured: list = []
    monkeypatch.setattr(
        "app.application.use_cases.notifications.emitter.dispatch_notification",
        captured.append,
    )
    return captured


@pytest.fixture()
def make_user(session):
    counter = {"value": 0}

    def _make_user(name: str | None = None, *, verified: bool = True) -> User:
        counter["value"] += 1
        label = name or f"User {counter['value']}"
        email = f"{label.lower().replace(' ', '.')}@example.com"
        return UserRepository(session).create(
            User(
                id=None,
                name=label,
                email=email,
                password=get_password_hash(DEFAULT_PASSWORD),
                email_verified=verified,
                email_verification_token=None,
                email_verification_expires_at=None,
                created_at=now_in_app_timezone(),
            )
        )

    return _make_user


@pytest.fixture()
def make_project(session):
    def _make_project(owner: User, *, members: list[User] = (), name: str = "Launch") -> Project:
        return ProjectRepository(session).create(
            Project(
                id=None,
                name=name,
                description=None,
                color=DEFAULT_PROJECT_COLOR,
                owner_id=owner.id,
                member_ids=[owner.id, *(member.id for member in members)],
                is_archived=False,
                created_at=now_in_app_timezone(),
            )
        )

    return _make_project


@pytest.fixture()
def make_task(session):
    def _make_task(
        owner: User,
        *,
        title: str = "Write report",
        assignees: list[User] = (),
        project: Project | None = None,
    ) -> Task:
        return TaskRepository(session).create(
            Task(
                id=None,
                title=title,
                description=None,
                status="pending",
                priority="medium",
                user_id=owner.id,
                project_id=project.id if project else None,
                assignee_ids=[assignee.id for assignee in assignees],
                created_at=now_in_app_timezone(),
            )
        )

    return _make_task


@pytest.fixture()
def auth_headers():
    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _auth_headers
