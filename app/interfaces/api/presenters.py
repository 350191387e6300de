"""Build response schemas from domain entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Comment, NotificationView, Project, Task, User
from app.infrastructure.notifications import serialize_notification
from app.infrastructure.repositories import ProjectRepository, UserRepository
from app.interfaces.api.schemas import (
    CommentRead,
    NotificationRead,
    ProjectRead,
    ProjectSummaryRead,
    TaskRead,
    UserRead,
    UserSummaryRead,
)


def user_read(user: User) -> UserRead:
    return UserRead.model_validate(user)


def _summary(users: dict[int, User], user_id: int | None) -> UserSummaryRead | None:
    user = users.get(user_id) if user_id is not None else None
    return UserSummaryRead.model_validate(user) if user else None


def tasks_read(session: Session, tasks: Sequence[Task]) -> list[TaskRead]:
    """Return ``tasks`` with creator, assignee and project summaries attached."""

    user_ids = {task.user_id for task in tasks}
    for task in tasks:
        user_ids.update(task.assignee_ids)
    users = UserRepository(session).get_map_by_ids(list(user_ids))

    projects: dict[int, Project | None] = {}
    project_repository = ProjectRepository(session)
    for project_id in {task.project_id for task in tasks if task.project_id}:
        projects[project_id] = project_repository.get(project_id)

    result: list[TaskRead] = []
    for task in tasks:
        project = projects.get(task.project_id) if task.project_id else None
        result.append(
            TaskRead(
                id=task.id,
                title=task.title,
                description=task.description,
                status=task.status,
                priority=task.priority,
                due_date=task.due_date,
                position=task.position,
                project_id=task.project_id,
                project=ProjectSummaryRead(id=project.id, name=project.name, color=project.color)
                if project
                else None,
                user=_summary(users, task.user_id),
                assignees=[
                    summary
                    for summary in (_summary(users, uid) for uid in task.assignee_ids)
                    if summary is not None
                ],
                created_at=task.created_at,
                updated_at=task.updated_at,
            )
        )
    return result


def task_read(session: Session, task: Task) -> TaskRead:
    return tasks_read(session, [task])[0]


def projects_read(session: Session, projects: Sequence[Project]) -> list[ProjectRead]:
    user_ids: set[int] = set()
    for project in projects:
        user_ids.add(project.owner_id)
        user_ids.update(project.member_ids)
    users = UserRepository(session).get_map_by_ids(list(user_ids))
    return [
        ProjectRead(
            id=project.id,
            name=project.name,
            description=project.description,
            color=project.color,
            owner=_summary(users, project.owner_id),
            members=[
                summary
                for summary in (_summary(users, uid) for uid in project.member_ids)
                if summary is not None
            ],
            is_archived=project.is_archived,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )
        for project in projects
    ]


def project_read(session: Session, project: Project) -> ProjectRead:
    return projects_read(session, [project])[0]


def comments_read(session: Session, comments: Sequence[Comment]) -> list[CommentRead]:
    users = UserRepository(session).get_map_by_ids([comment.user_id for comment in comments])
    return [
        CommentRead(
            id=comment.id,
            content=comment.content,
            task_id=comment.task_id,
            user=_summary(users, comment.user_id),
            is_edited=comment.is_edited,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
        for comment in comments
    ]


def comment_read(session: Session, comment: Comment) -> CommentRead:
    return comments_read(session, [comment])[0]


def notification_read(view: NotificationView) -> NotificationRead:
    return NotificationRead.model_validate(serialize_notification(view))
