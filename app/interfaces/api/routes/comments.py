"""Endpoints for task comments."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.use_cases.comments import (
    create_comment as create_comment_uc,
    delete_comment as delete_comment_uc,
    list_comments as list_comments_uc,
    update_comment as update_comment_uc,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_user
from app.interfaces.api.errors import to_http_exception
from app.interfaces.api.presenters import comment_read, comments_read
from app.interfaces.api.schemas import CommentCreate, CommentRead, CommentUpdate, MessageResponse

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("/task/{task_id}", response_model=list[CommentRead])
def list_comments(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        comments = list_comments_uc(db, task_id=task_id, user_id=current_user.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return comments_read(db, comments)


@router.post("/", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
def create_comment(
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Comment on a task; its creator and assignees are notified."""

    try:
        comment = create_comment_uc(
            db, task_id=payload.task_id, user_id=current_user.id, content=payload.content
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return comment_read(db, comment)


@router.put("/{comment_id}", response_model=CommentRead)
def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        comment = update_comment_uc(
            db, comment_id=comment_id, user_id=current_user.id, content=payload.content
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return comment_read(db, comment)


@router.delete("/{comment_id}", response_model=MessageResponse)
def delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        delete_comment_uc(db, comment_id=comment_id, user_id=current_user.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return MessageResponse(message="Comment deleted successfully")
