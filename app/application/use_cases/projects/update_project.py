"""Use case for updating projects."""

from dataclasses import replace

from sqlalchemy.orm import Session

from app.domain.entities import Project
from app.infrastructure.repositories import ProjectRepository

from .get_project import get_owned_project
from .validators import ensure_valid_color, ensure_valid_project_name

_UNSET = object()


def update_project(
    session: Session,
    *,
    project_id: int,
    user_id: int,
    name: str | None = None,
    description: str | None | object = _UNSET,
    color: str | None = None,
    is_archived: bool | None = None,
) -> Project:
    """Update a project; only its owner may do so."""

    current = get_owned_project(session, project_id=project_id, user_id=user_id)
    updated = replace(
        current,
        name=ensure_valid_project_name(name) if name is not None else current.name,
        description=current.description if description is _UNSET else description,
        color=ensure_valid_color(color) if color is not None else current.color,
        is_archived=is_archived if is_archived is not None else current.is_archived,
    )
    return ProjectRepository(session).update(updated)
