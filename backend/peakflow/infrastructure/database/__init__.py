from .base import Base
from .session import engine, async_session_factory, get_db_session, session_scope
from .models import ArticleModel, CommentModel, NewsletterSubscriberModel, UserRoleModel

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "session_scope",
    "ArticleModel",
    "CommentModel",
    "NewsletterSubscriberModel",
    "UserRoleModel",
]
