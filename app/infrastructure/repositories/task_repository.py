"""Persistence helpers for task entities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.domain.entities import (
    TASK_PRIORITIES,
    TASK_STATUSES,
    Task,
)
from app.infrastructure.models import (
    ProjectModel,
    TaskModel,
    UserModel,
    project_member_table,
    task_assignee_table,
)
from app.utils import ensure_app_naive_datetime, ensure_app_timezone


class TaskRepository:
    """Provide CRUD and query operations for :class:`Task` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, task_id: int) -> Task | None:
        model = self.session.get(TaskModel, task_id)
        return self._to_entity(model) if model else None

    def list_visible(
        self,
        user_id: int,
        *,
        status: str | None = None,
        priority: str | None = None,
        search: str | None = None,
        project_id: int | None = None,
        assigned_user_id: int | None = None,
    ) -> Sequence[Task]:
        """Return tasks ``user_id`` may see, newest first."""

        query = self.session.query(TaskModel).filter(self._visibility_clause(user_id))
        if status:
            query = query.filter(TaskModel.status == status)
        if priority:
            query = query.filter(TaskModel.priority == priority)
        if project_id is not None:
            query = query.filter(TaskModel.project_id == project_id)
        if assigned_user_id is not None:
            assigned = self.session.query(task_assignee_table.c.task_id).filter(
                task_assignee_table.c.user_id == assigned_user_id
            )
            query = query.filter(TaskModel.id.in_(assigned))
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(TaskModel.title.ilike(pattern), TaskModel.description.ilike(pattern))
            )
        query = query.order_by(TaskModel.created_at.desc(), TaskModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def list_for_project(self, project_id: int) -> Sequence[Task]:
        query = (
            self.session.query(TaskModel)
            .filter(TaskModel.project_id == project_id)
            .order_by(TaskModel.position.asc(), TaskModel.created_at.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, task: Task) -> Task:
        model = TaskModel()
        self._apply_entity_to_model(model, task)
        if task.created_at is not None:
            model.created_at = ensure_app_naive_datetime(task.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, task: Task) -> Task:
        model = self.session.get(TaskModel, task.id)
        if model is None:
            msg = f"Task with id {task.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, task)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, task_id: int) -> None:
        model = self.session.get(TaskModel, task_id)
        if model is None:
            return
        self.session.delete(model)
        self.session.commit()

    def reorder(self, positions: Iterable[tuple[int, int, str | None]]) -> None:
        """Persist ``(task_id, position, status)`` triples in one transaction."""

        for task_id, position, status in positions:
            values: dict[object, object] = {TaskModel.position: position}
            if status is not None:
                values[TaskModel.status] = status
            self.session.query(TaskModel).filter(TaskModel.id == task_id).update(
                values, synchronize_session=False
            )
        self.session.commit()

    def statistics_for_user(self, user_id: int) -> dict[str, dict[str, int] | int]:
        assigned = self.session.query(task_assignee_table.c.task_id).filter(
            task_assignee_table.c.user_id == user_id
        )
        clause = or_(TaskModel.user_id == user_id, TaskModel.id.in_(assigned))
        return self._statistics(clause, include_priority=True)

    def statistics_for_project(self, project_id: int) -> dict[str, dict[str, int] | int]:
        return self._statistics(TaskModel.project_id == project_id, include_priority=False)

    def _statistics(self, clause, *, include_priority: bool) -> dict[str, dict[str, int] | int]:
        by_status = dict(
            self.session.query(TaskModel.status, func.count(TaskModel.id))
            .filter(clause)
            .group_by(TaskModel.status)
            .all()
        )
        result: dict[str, dict[str, int] | int] = {
            "total": sum(by_status.values()),
            "by_status": {status: int(by_status.get(status, 0)) for status in TASK_STATUSES},
        }
        if include_priority:
            by_priority = dict(
                self.session.query(TaskModel.priority, func.count(TaskModel.id))
                .filter(clause)
                .group_by(TaskModel.priority)
                .all()
            )
            result["by_priority"] = {
                priority: int(by_priority.get(priority, 0)) for priority in TASK_PRIORITIES
            }
        return result

    def _visibility_clause(self, user_id: int):
        assigned = self.session.query(task_assignee_table.c.task_id).filter(
            task_assignee_table.c.user_id == user_id
        )
        member_projects = self.session.query(project_member_table.c.project_id).filter(
            project_member_table.c.user_id == user_id
        )
        owned_projects = self.session.query(ProjectModel.id).filter(
            ProjectModel.owner_id == user_id
        )
        return or_(
            TaskModel.user_id == user_id,
            TaskModel.id.in_(assigned),
            TaskModel.project_id.in_(member_projects),
            TaskModel.project_id.in_(owned_projects),
        )

    def _apply_entity_to_model(self, model: TaskModel, task: Task) -> None:
        model.title = task.title
        model.description = task.description
        model.status = task.status
        model.priority = task.priority
        model.due_date = ensure_app_naive_datetime(task.due_date)
        model.position = task.position
        model.user_id = task.user_id
        model.project_id = task.project_id
        assignee_ids = list(dict.fromkeys(task.assignee_ids))
        if assignee_ids:
            assignees = (
                self.session.query(UserModel).filter(UserModel.id.in_(assignee_ids)).all()
            )
        else:
            assignees = []
        model.assignees = assignees

    @staticmethod
    def _to_entity(model: TaskModel) -> Task:
        return Task(
            id=model.id,
            title=model.title,
            description=model.description,
            status=model.status,
            priority=model.priority,
            user_id=model.user_id,
            project_id=model.project_id,
            assignee_ids=[assignee.id for assignee in model.assignees],
            due_date=ensure_app_timezone(model.due_date),
            position=model.position or 0,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["TaskRepository"]
