from .article import (
    ArticleCreate,
    ArticleDisplayResponse,
    ArticleResponse,
    ArticleUpdate,
    FeaturedSelection,
)
from .comment import CommentCreate, CommentResponse, CommentUpdate
from .dashboard import (
    ChartSlice,
    DashboardChartsResponse,
    DashboardStatsResponse,
    TimelinePoint,
)
from .newsletter import SubscribeRequest, SubscribeResponse, SubscriberResponse
from .user_role import CurrentUserResponse, RoleUpdate, UserRoleResponse

__all__ = [
    "ArticleCreate",
    "ArticleDisplayResponse",
    "ArticleResponse",
    "ArticleUpdate",
    "FeaturedSelection",
    "CommentCreate",
    "CommentResponse",
    "CommentUpdate",
    "ChartSlice",
    "DashboardChartsResponse",
    "DashboardStatsResponse",
    "TimelinePoint",
    "SubscribeRequest",
    "SubscribeResponse",
    "SubscriberResponse",
    "CurrentUserResponse",
    "RoleUpdate",
    "UserRoleResponse",
]
