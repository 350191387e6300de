"""Use case for creating projects."""

from sqlalchemy.orm import Session

from app.domain.entities import DEFAULT_PROJECT_COLOR, Project
from app.infrastructure.repositories import ProjectRepository
from app.utils import now_in_app_timezone

from .validators import ensure_valid_color, ensure_valid_project_name


def create_project(
    session: Session,
    *,
    owner_id: int,
    name: str,
    description: str | None = None,
    color: str | None = None,
) -> Project:
    """Create a project owned by ``owner_id``, who is also its first member."""

    project = Project(
        id=None,
        name=ensure_valid_project_name(name),
        description=description.strip() if description else None,
        color=ensure_valid_color(color) if color else DEFAULT_PROJECT_COLOR,
        owner_id=owner_id,
        member_ids=[owner_id],
        is_archived=False,
        created_at=now_in_app_timezone(),
    )
    return ProjectRepository(session).create(project)
