"""Use case for listing the projects a user belongs to."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Project
from app.infrastructure.repositories import ProjectRepository


def list_projects(
    session: Session, *, user_id: int, include_archived: bool = False
) -> Sequence[Project]:
    """Return owned and shared projects, newest first."""

    return ProjectRepository(session).list_for_member(
        user_id, include_archived=include_archived
    )
