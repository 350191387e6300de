"""ORM models used by the application infrastructure."""

from .user import UserModel
from .project import ProjectModel, project_member_table
from .task import TaskModel, task_assignee_table
from .comment import CommentModel
from .notification import NotificationModel

__all__ = [
    "UserModel",
    "ProjectModel",
    "project_member_table",
    "TaskModel",
    "task_assignee_table",
    "CommentModel",
    "NotificationModel",
]
