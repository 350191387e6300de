"""Use case for commenting on a task."""

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import notify_new_comment
from app.application.use_cases.tasks import get_task
from app.domain.entities import Comment
from app.infrastructure.repositories import CommentRepository
from app.utils import now_in_app_timezone

from .validators import ensure_valid_content


def create_comment(session: Session, *, task_id: int, user_id: int, content: str) -> Comment:
    """Store a comment and notify the task's creator and assignees."""

    task = get_task(session, task_id=task_id, user_id=user_id)
    comment = CommentRepository(session).create(
        Comment(
            id=None,
            content=ensure_valid_content(content),
            task_id=task.id,
            user_id=user_id,
            created_at=now_in_app_timezone(),
        )
    )
    notify_new_comment(
        session,
        comment=comment,
        task=task,
        recipients=[task.user_id, *task.assignee_ids],
    )
    return comment
