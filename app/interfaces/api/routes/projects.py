"""Endpoints for managing projects and their members."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.use_cases.projects import (
    add_member as add_member_uc,
    create_project as create_project_uc,
    delete_project as delete_project_uc,
    get_project_with_tasks,
    list_projects as list_projects_uc,
    project_statistics as project_statistics_uc,
    remove_member as remove_member_uc,
    update_project as update_project_uc,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.presenters import project_read, projects_read, tasks_read
from app.interfaces.api.schemas import (
    MessageResponse,
    ProjectCreate,
    ProjectDetailRead,
    ProjectMemberAdd,
    ProjectRead,
    ProjectStatisticsRead,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("/", response_model=list[ProjectRead])
def list_projects(
    include_archived: bool = False,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    projects = list_projects_uc(db, user_id=current_user.id, include_archived=include_archived)
    return projects_read(db, projects)


@router.post("/", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        project = create_project_uc(
            db,
            owner_id=current_user.id,
            name=payload.name,
            description=payload.description,
            color=payload.color,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return project_read(db, project)


@router.get("/{project_id}", response_model=ProjectDetailRead)
def read_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Return the project together with its tasks."""

    try:
        project, tasks = get_project_with_tasks(db, project_id=project_id, user_id=current_user.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ProjectDetailRead(project=project_read(db, project), tasks=tasks_read(db, tasks))


@router.put("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    changes = payload.model_dump(exclude_unset=True)
    try:
        project = update_project_uc(db, project_id=project_id, user_id=current_user.id, **changes)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return project_read(db, project)


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        delete_project_uc(db, project_id=project_id, user_id=current_user.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Project deleted successfully")


@router.post("/{project_id}/members", response_model=ProjectRead)
def add_member(
    project_id: int,
    payload: ProjectMemberAdd,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add a member; they receive a notification unless they added themselves."""

    try:
        project = add_member_uc(
            db, project_id=project_id, member_id=payload.user_id, added_by=current_user.id
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return project_read(db, project)


@router.delete("/{project_id}/members/{user_id}", response_model=ProjectRead)
def remove_member(
    project_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        project = remove_member_uc(
            db, project_id=project_id, member_id=user_id, removed_by=current_user.id
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return project_read(db, project)


@router.get("/{project_id}/statistics", response_model=ProjectStatisticsRead)
def read_statistics(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return project_statistics_uc(db, project_id=project_id, user_id=current_user.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
