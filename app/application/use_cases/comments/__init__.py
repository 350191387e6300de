"""Use cases for managing task comments."""

from .create_comment import create_comment
from .list_comments import list_comments
from .manage_comment import delete_comment, get_authored_comment, update_comment

__all__ = [
    "create_comment",
    "delete_comment",
    "get_authored_comment",
    "list_comments",
    "update_comment",
]
