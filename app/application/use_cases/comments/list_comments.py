"""Use case for reading the comments on a task."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.application.use_cases.tasks import get_task
from app.domain.entities import Comment
from app.infrastructure.repositories import CommentRepository


def list_comments(session: Session, *, task_id: int, user_id: int) -> Sequence[Comment]:
    """Return the task's comments, newest first, if the user can see the task."""

    get_task(session, task_id=task_id, user_id=user_id)
    return CommentRepository(session).list_for_task(task_id)
