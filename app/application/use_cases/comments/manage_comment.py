"""Use cases for editing and deleting one's own comments."""

from dataclasses import replace

from sqlalchemy.orm import Session

from app.application.errors import NotFoundError, PermissionDeniedError
from app.application.use_cases.tasks import get_task
from app.domain.entities import Comment
from app.infrastructure.repositories import CommentRepository

from .validators import ensure_valid_content


def get_authored_comment(session: Session, *, comment_id: int, user_id: int) -> Comment:
    """Return the comment if ``user_id`` wrote it.

    Comments on tasks the user cannot see are reported as missing.
    """

    comment = CommentRepository(session).get(comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    get_task(session, task_id=comment.task_id, user_id=user_id)
    if comment.user_id != user_id:
        raise PermissionDeniedError("Only the author can change this comment")
    return comment


def update_comment(session: Session, *, comment_id: int, user_id: int, content: str) -> Comment:
    comment = get_authored_comment(session, comment_id=comment_id, user_id=user_id)
    return CommentRepository(session).update(
        replace(comment, content=ensure_valid_content(content), is_edited=True)
    )


def delete_comment(session: Session, *, comment_id: int, user_id: int) -> None:
    get_authored_comment(session, comment_id=comment_id, user_id=user_id)
    CommentRepository(session).delete(comment_id)
