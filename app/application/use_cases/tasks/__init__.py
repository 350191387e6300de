"""Use cases for managing tasks."""

from .create_task import create_task
from .delete_task import delete_task
from .get_task import get_owned_task, get_task, get_task_with_access
from .list_tasks import list_tasks
from .reorder_tasks import reorder_tasks
from .task_statistics import task_statistics
from .update_task import UPDATABLE_FIELDS, update_task

__all__ = [
    "UPDATABLE_FIELDS",
    "create_task",
    "delete_task",
    "get_owned_task",
    "get_task",
    "get_task_with_access",
    "list_tasks",
    "reorder_tasks",
    "task_statistics",
    "update_task",
]
