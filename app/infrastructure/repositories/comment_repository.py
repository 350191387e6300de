"""Persistence helpers for task comments."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Comment
from app.infrastructure.models import CommentModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone


class CommentRepository:
    """Provide CRUD operations for :class:`Comment` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, comment_id: int) -> Comment | None:
        model = self.session.get(CommentModel, comment_id)
        return self._to_entity(model) if model else None

    def list_for_task(self, task_id: int) -> Sequence[Comment]:
        query = (
            self.session.query(CommentModel)
            .filter(CommentModel.task_id == task_id)
            .order_by(CommentModel.created_at.desc(), CommentModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, comment: Comment) -> Comment:
        model = CommentModel(
            content=comment.content,
            task_id=comment.task_id,
            user_id=comment.user_id,
            is_edited=comment.is_edited,
        )
        if comment.created_at is not None:
            model.created_at = ensure_app_naive_datetime(comment.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, comment: Comment) -> Comment:
        model = self.session.get(CommentModel, comment.id)
        if model is None:
            msg = f"Comment with id {comment.id} not found"
            raise ValueError(msg)
        model.content = comment.content
        model.is_edited = comment.is_edited
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, comment_id: int) -> None:
        model = self.session.get(CommentModel, comment_id)
        if model is None:
            return
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _to_entity(model: CommentModel) -> Comment:
        return Comment(
            id=model.id,
            content=model.content,
            task_id=model.task_id,
            user_id=model.user_id,
            is_edited=bool(model.is_edited),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["CommentRepository"]
