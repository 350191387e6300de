"""Persistence helpers for project entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.domain.entities import Project
from app.infrastructure.models import ProjectModel, TaskModel, UserModel, project_member_table
from app.utils import ensure_app_naive_datetime, ensure_app_timezone


class ProjectRepository:
    """Provide CRUD operations for :class:`Project` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, project_id: int) -> Project | None:
        model = self.session.get(ProjectModel, project_id)
        return self._to_entity(model) if model else None

    def get_for_member(self, project_id: int, user_id: int) -> Project | None:
        model = (
            self._member_query(user_id)
            .filter(ProjectModel.id == project_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_member(self, user_id: int, *, include_archived: bool = False) -> Sequence[Project]:
        query = self._member_query(user_id)
        if not include_archived:
            query = query.filter(ProjectModel.is_archived.is_(False))
        query = query.order_by(ProjectModel.created_at.desc(), ProjectModel.id.desc())
        return [self._to_entity(model) for model in query.all()]

    def create(self, project: Project) -> Project:
        model = ProjectModel()
        self._apply_entity_to_model(model, project)
        if project.created_at is not None:
            model.created_at = ensure_app_naive_datetime(project.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, project: Project) -> Project:
        model = self.session.get(ProjectModel, project.id)
        if model is None:
            msg = f"Project with id {project.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, project)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, project_id: int) -> None:
        """Delete the project and detach its tasks instead of deleting them."""

        model = self.session.get(ProjectModel, project_id)
        if model is None:
            return
        self.session.query(TaskModel).filter(TaskModel.project_id == project_id).update(
            {TaskModel.project_id: None}, synchronize_session=False
        )
        self.session.delete(model)
        self.session.commit()

    def _member_query(self, user_id: int):
        member_ids = (
            self.session.query(project_member_table.c.project_id)
            .filter(project_member_table.c.user_id == user_id)
        )
        return self.session.query(ProjectModel).filter(
            or_(ProjectModel.owner_id == user_id, ProjectModel.id.in_(member_ids))
        )

    def _apply_entity_to_model(self, model: ProjectModel, project: Project) -> None:
        model.name = project.name
        model.description = project.description
        model.color = project.color
        model.owner_id = project.owner_id
        model.is_archived = project.is_archived
        member_ids = list(dict.fromkeys(project.member_ids))
        if member_ids:
            members = (
                self.session.query(UserModel).filter(UserModel.id.in_(member_ids)).all()
            )
        else:
            members = []
        model.members = members

    @staticmethod
    def _to_entity(model: ProjectModel) -> Project:
        return Project(
            id=model.id,
            name=model.name,
            description=model.description,
            color=model.color,
            owner_id=model.owner_id,
            member_ids=[member.id for member in model.members],
            is_archived=bool(model.is_archived),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["ProjectRepository"]
