"""Comment thread — the live comment list for one article plus its mutations.

Mutations never splice into local state; the new list arrives through the
change feed re-fetch. Each mutation reports through a transient ``Notice``
and returns a bool the caller can use to reset its form.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from peakflow.application.services.auth_context import AuthContext
from peakflow.application.services.change_feed import ChangeFeed
from peakflow.application.services.comment_service import CommentService
from peakflow.application.services.live_query import LiveQuery, ServiceScope
from peakflow.domain.entities import AuthSnapshot, Comment
from peakflow.infrastructure.logging.sync_logger import SyncStage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    level: str  # "success" | "error"
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"level": self.level, "message": self.message}


NoticeHandler = Callable[[Notice], None]


class CommentThread(LiveQuery[Comment]):

    table = "comments"
    keep_items_on_error = True

    def __init__(
        self,
        article_id: str | None,
        service_scope: ServiceScope[CommentService],
        change_feed: ChangeFeed,
        auth: AuthContext,
        on_notice: NoticeHandler | None = None,
    ):
        super().__init__(change_feed, filters={"article_id": article_id})
        self.article_id = article_id
        self._scope = service_scope
        self._auth = auth
        self._on_notice = on_notice or (lambda notice: None)
        self._unsubscribe_auth = auth.subscribe(self._on_auth_change)

    async def fetch(self) -> list[Comment]:
        if not self.article_id:
            return []
        async with self._scope() as service:
            return await service.list_for_article(self.article_id)

    # ── Read-side helpers ────────────────────────────────────────────

    @property
    def comments(self) -> tuple[Comment, ...]:
        return self.state.items

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def is_authenticated(self) -> bool:
        return self._auth.snapshot.is_authenticated

    @property
    def current_user_id(self) -> str | None:
        user = self._auth.snapshot.user
        return user.id if user else None

    def can_modify(self, comment: Comment) -> bool:
        """Edit/delete controls are offered only to the comment's owner."""
        return self.current_user_id is not None and self.current_user_id == comment.user_id

    # ── Mutations ────────────────────────────────────────────────────

    async def add_comment(self, content: str) -> bool:
        user = self._auth.snapshot.user
        if user is None or not self.article_id:
            self._notify("error", "You must be logged in to comment")
            return False

        self._log.step(SyncStage.MUTATE, "Adding comment", article_id=self.article_id)
        try:
            async with self._scope() as service:
                await service.add_comment(self.article_id, user, content)
        except Exception:
            logger.exception("Error adding comment to %s", self.article_id)
            self._notify("error", "Failed to add comment")
            return False

        self._notify("success", "Comment added!")
        return True

    async def delete_comment(self, comment_id: str) -> bool:
        self._log.step(SyncStage.MUTATE, "Deleting comment", comment_id=comment_id)
        try:
            async with self._scope() as service:
                await service.delete_comment(comment_id, self._auth.snapshot.user)
        except Exception:
            logger.exception("Error deleting comment %s", comment_id)
            self._notify("error", "Failed to delete comment")
            return False

        self._notify("success", "Comment deleted")
        return True

    async def update_comment(self, comment_id: str, content: str) -> bool:
        self._log.step(SyncStage.MUTATE, "Updating comment", comment_id=comment_id)
        try:
            async with self._scope() as service:
                await service.update_comment(comment_id, self._auth.snapshot.user, content)
        except Exception:
            logger.exception("Error updating comment %s", comment_id)
            self._notify("error", "Failed to update comment")
            return False

        self._notify("success", "Comment updated")
        return True

    async def close(self) -> None:
        self._unsubscribe_auth()
        await super().close()

    def _notify(self, level: str, message: str) -> None:
        self._on_notice(Notice(level=level, message=message))

    def _on_auth_change(self, snapshot: AuthSnapshot) -> None:
        # Comments are unchanged; consumers re-render owner controls.
        self._publish()
