"""Use cases for managing project membership."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.orm import Session

from app.application.errors import NotFoundError
from app.application.use_cases.notifications import notify_project_member_added
from app.domain.entities import Project
from app.infrastructure.repositories import ProjectRepository, UserRepository

from .get_project import get_owned_project


def add_member(session: Session, *, project_id: int, member_id: int, added_by: int) -> Project:
    """Add ``member_id`` to the project and notify them.

    Adding someone who is already a member changes nothing and sends nothing.
    """

    project = get_owned_project(session, project_id=project_id, user_id=added_by)
    if UserRepository(session).get(member_id) is None:
        raise NotFoundError("User not found")
    if member_id in project.member_ids:
        return project

    updated = ProjectRepository(session).update(
        replace(project, member_ids=[*project.member_ids, member_id])
    )
    notify_project_member_added(
        session, project=updated, new_member_id=member_id, added_by=added_by
    )
    return updated


def remove_member(
    session: Session, *, project_id: int, member_id: int, removed_by: int
) -> Project:
    project = get_owned_project(session, project_id=project_id, user_id=removed_by)
    if member_id == project.owner_id:
        raise ValueError("The project owner cannot be removed")
    if member_id not in project.member_ids:
        return project
    return ProjectRepository(session).update(
        replace(project, member_ids=[uid for uid in project.member_ids if uid != member_id])
    )
