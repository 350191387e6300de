"""Domain entity representing a project that groups tasks."""

from dataclasses import dataclass, field
from datetime import datetime

PROJECT_COLORS: tuple[str, ...] = (
    "#14b8a6",
    "#3b82f6",
    "#8b5cf6",
    "#ec4899",
    "#f59e0b",
    "#10b981",
    "#ef4444",
    "#6366f1",
)
DEFAULT_PROJECT_COLOR = PROJECT_COLORS[0]


@dataclass
class Project:
    """A shared workspace owned by one user and visible to its members."""

    id: int | None
    name: str
    description: str | None
    color: str
    owner_id: int
    member_ids: list[int] = field(default_factory=list)
    is_archived: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_owner(self, user_id: int) -> bool:
        return self.owner_id == user_id

    def is_member(self, user_id: int) -> bool:
        """Return ``True`` when ``user_id`` owns or belongs to the project."""

        return self.owner_id == user_id or user_id in self.member_ids


__all__ = ["Project", "PROJECT_COLORS", "DEFAULT_PROJECT_COLOR"]
