"""Endpoints for managing tasks."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.tasks import (
    create_task as create_task_uc,
    delete_task as delete_task_uc,
    get_task as get_task_uc,
    list_tasks as list_tasks_uc,
    reorder_tasks as reorder_tasks_uc,
    task_statistics as task_statistics_uc,
    update_task as update_task_uc,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.presenters import task_read, tasks_read
from app.interfaces.api.schemas import (
    MessageResponse,
    TaskCreate,
    TaskRead,
    TaskReorderRequest,
    TaskStatisticsRead,
    TaskUpdate,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/statistics", response_model=TaskStatisticsRead)
def read_statistics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Count the tasks the user created or is assigned to, by status and priority."""

    return task_statistics_uc(db, user_id=current_user.id)


@router.get("/", response_model=list[TaskRead])
def list_tasks(
    status_filter: str | None = Query(default=None, alias="status"),
    priority: str | None = None,
    search: str | None = None,
    project: int | None = None,
    assigned_user: int | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        tasks = list_tasks_uc(
            db,
            user_id=current_user.id,
            status=status_filter,
            priority=priority,
            search=search,
            project_id=project,
            assigned_user_id=assigned_user,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return tasks_read(db, tasks)


@router.post("/", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a task; assignees are notified."""

    try:
        task = create_task_uc(
            db,
            user_id=current_user.id,
            title=payload.title,
            description=payload.description,
            status=payload.status,
            priority=payload.priority,
            due_date=payload.due_date,
            project_id=payload.project_id,
            assignee_ids=payload.assignee_ids,
            position=payload.position,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return task_read(db, task)


@router.put("/reorder", response_model=list[TaskRead])
def reorder_tasks(
    payload: TaskReorderRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Persist Kanban positions and column changes for several tasks at once."""

    try:
        tasks = reorder_tasks_uc(
            db,
            user_id=current_user.id,
            items=[(item.id, item.position, item.status) for item in payload.tasks],
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return tasks_read(db, tasks)


@router.get("/{task_id}", response_model=TaskRead)
def read_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        task = get_task_uc(db, task_id=task_id, user_id=current_user.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return task_read(db, task)


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: int,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update a task; participants other than the editor are notified."""

    changes = payload.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nothing to update")
    try:
        task = update_task_uc(db, task_id=task_id, user_id=current_user.id, changes=changes)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return task_read(db, task)


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        delete_task_uc(db, task_id=task_id, user_id=current_user.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Task deleted successfully")
