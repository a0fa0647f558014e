from .article_repository import ArticleRepository
from .auth_provider import AuthProvider
from .comment_repository import CommentRepository
from .subscriber_repository import SubscriberRepository
from .user_role_repository import UserRoleRepository

__all__ = [
    "ArticleRepository",
    "AuthProvider",
    "CommentRepository",
    "SubscriberRepository",
    "UserRoleRepository",
]
