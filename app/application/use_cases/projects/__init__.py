"""Use cases for managing projects."""

from .create_project import create_project
from .delete_project import delete_project
from .get_project import get_owned_project, get_project, get_project_with_tasks
from .list_projects import list_projects
from .members import add_member, remove_member
from .project_statistics import project_statistics
from .update_project import update_project

__all__ = [
    "add_member",
    "create_project",
    "delete_project",
    "get_owned_project",
    "get_project",
    "get_project_with_tasks",
    "list_projects",
    "project_statistics",
    "remove_member",
    "update_project",
]
