from .article_service import ArticleService
from .auth_context import AuthContext
from .change_feed import ChangeFeed, Subscription
from .comment_service import CommentService
from .comment_thread import CommentThread, Notice
from .dashboard_service import DashboardService
from .display import ArticleDisplay, category_color, to_display
from .live_articles import LiveArticleList
from .live_query import LiveQuery, LiveState
from .newsletter_service import NewsletterService, export_subscribers_csv
from .sitemap_service import SitemapService
from .user_role_service import UserRoleService

__all__ = [
    "ArticleService",
    "AuthContext",
    "ChangeFeed",
    "Subscription",
    "CommentService",
    "CommentThread",
    "Notice",
    "DashboardService",
    "ArticleDisplay",
    "category_color",
    "to_display",
    "LiveArticleList",
    "LiveQuery",
    "LiveState",
    "NewsletterService",
    "export_subscribers_csv",
    "SitemapService",
    "UserRoleService",
]
