from .auth import (
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResendVerificationRequest,
    Token,
    VerifyEmailRequest,
    VerifyEmailResponse,
)
from .comment import CommentCreate, CommentRead, CommentUpdate
from .notification import (
    NotificationCountRead,
    NotificationListRead,
    NotificationMarkReadRequest,
    NotificationRead,
)
from .project import (
    ProjectCreate,
    ProjectDetailRead,
    ProjectMemberAdd,
    ProjectRead,
    ProjectStatisticsRead,
    ProjectUpdate,
)
from .task import (
    ProjectSummaryRead,
    TaskCreate,
    TaskRead,
    TaskReorderItem,
    TaskReorderRequest,
    TaskStatisticsRead,
    TaskUpdate,
)
from .user import UserRead, UserSummaryRead

__all__ = [
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "RegisterResponse",
    "ResendVerificationRequest",
    "Token",
    "VerifyEmailRequest",
    "VerifyEmailResponse",
    "CommentCreate",
    "CommentRead",
    "CommentUpdate",
    "NotificationCountRead",
    "NotificationListRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "ProjectCreate",
    "ProjectDetailRead",
    "ProjectMemberAdd",
    "ProjectRead",
    "ProjectStatisticsRead",
    "ProjectUpdate",
    "ProjectSummaryRead",
    "TaskCreate",
    "TaskRead",
    "TaskReorderItem",
    "TaskReorderRequest",
    "TaskStatisticsRead",
    "TaskUpdate",
    "UserRead",
    "UserSummaryRead",
]
