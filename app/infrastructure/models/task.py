"""SQLAlchemy models for tasks and their assignees."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from app.domain.entities import TASK_PRIORITY_MEDIUM, TASK_STATUS_PENDING
from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime

task_assignee_table = Table(
    "task_assignee",
    Base.metadata,
    Column(
        "task_id",
        Integer,
        ForeignKey("task.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class TaskModel(Base):
    """Database representation of a task."""

    __tablename__ = "task"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=TASK_STATUS_PENDING, index=True)
    priority = Column(String(20), nullable=False, default=TASK_PRIORITY_MEDIUM, index=True)
    due_date = Column(DateTime, nullable=True)
    position = Column(Integer, nullable=False, default=0)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    project_id = Column(
        Integer, ForeignKey("project.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)

    creator = relationship("UserModel", lazy="joined")
    project = relationship("ProjectModel", lazy="joined")
    assignees = relationship(
        "UserModel",
        secondary=task_assignee_table,
        lazy="selectin",
        order_by="UserModel.id",
    )


__all__ = ["TaskModel", "task_assignee_table"]
