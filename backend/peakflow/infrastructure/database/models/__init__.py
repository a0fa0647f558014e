from .article import ArticleModel
from .comment import CommentModel
from .subscriber import NewsletterSubscriberModel
from .user_role import UserRoleModel

__all__ = [
    "ArticleModel",
    "CommentModel",
    "NewsletterSubscriberModel",
    "UserRoleModel",
]
