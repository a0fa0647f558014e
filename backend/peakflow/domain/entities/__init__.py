from .article import Article
from .auth import AuthSession, AuthSnapshot, AuthUser, SessionEvent
from .change_event import ChangeEvent, ChangeType
from .comment import Comment
from .subscriber import NewsletterSubscriber
from .user_role import Role, UserRole

__all__ = [
    "Article",
    "AuthSession",
    "AuthSnapshot",
    "AuthUser",
    "SessionEvent",
    "ChangeEvent",
    "ChangeType",
    "Comment",
    "NewsletterSubscriber",
    "Role",
    "UserRole",
]
