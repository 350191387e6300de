"""SQLAlchemy models for projects and their membership."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from app.domain.entities import DEFAULT_PROJECT_COLOR
from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime

project_member_table = Table(
    "project_member",
    Base.metadata,
    Column(
        "project_id",
        Integer,
        ForeignKey("project.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class ProjectModel(Base):
    """Database representation of a project."""

    __tablename__ = "project"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(7), nullable=False, default=DEFAULT_PROJECT_COLOR)
    owner_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    is_archived = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)

    owner = relationship("UserModel", lazy="joined")
    members = relationship(
        "UserModel",
        secondary=project_member_table,
        lazy="selectin",
        order_by="UserModel.id",
    )


__all__ = ["ProjectModel", "project_member_table"]
