"""Client-side building blocks: REST wrapper, realtime caches and session."""

from .api import TaskflowClient
from .caches import CommentCache, EntityCache, NotificationCache, TaskCache
from .reducers import CacheState
from .session import RealtimeConnection, RealtimeSession
from .transport import RealtimeSubscriber, WebSocketConnection, build_socket_url

__all__ = [
    "CacheState",
    "CommentCache",
    "EntityCache",
    "NotificationCache",
    "RealtimeConnection",
    "RealtimeSession",
    "RealtimeSubscriber",
    "TaskCache",
    "TaskflowClient",
    "WebSocketConnection",
    "build_socket_url",
]
