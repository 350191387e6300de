"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index(
            "ix_notification_recipient_read_created",
            "recipient_id",
            "is_read",
            "created_at",
        ),
        # Backstop for the repository's dedup-window check, task notifications only.
        Index(
            "uq_notification_task_dedup",
            "recipient_id",
            "event_type",
            "related_task_id",
            "sender_id",
            "dedup_bucket",
            unique=True,
            sqlite_where=text("related_task_id IS NOT NULL"),
            postgresql_where=text("related_task_id IS NOT NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sender_id = Column(
        Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True
    )
    event_type = Column(String(30), nullable=False)
    title = Column(String(120), nullable=False)
    message = Column(Text, nullable=False)
    related_task_id = Column(
        Integer, ForeignKey("task.id", ondelete="SET NULL"), nullable=True, index=True
    )
    related_project_id = Column(
        Integer, ForeignKey("project.id", ondelete="SET NULL"), nullable=True
    )
    is_read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    link = Column(String(255), nullable=True)
    dedup_bucket = Column(Integer, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    sender = relationship("UserModel", foreign_keys=[sender_id], lazy="joined")
    related_task = relationship("TaskModel", lazy="joined")
    related_project = relationship("ProjectModel", lazy="joined")


__all__ = ["NotificationModel"]
