from .article_repository import SQLAlchemyArticleRepository
from .comment_repository import SQLAlchemyCommentRepository
from .subscriber_repository import SQLAlchemySubscriberRepository
from .user_role_repository import SessionScopedUserRoleRepository, SQLAlchemyUserRoleRepository

__all__ = [
    "SQLAlchemyArticleRepository",
    "SQLAlchemyCommentRepository",
    "SQLAlchemySubscriberRepository",
    "SQLAlchemyUserRoleRepository",
    "SessionScopedUserRoleRepository",
]
