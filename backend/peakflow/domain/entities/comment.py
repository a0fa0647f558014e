"""Domain entity for reader comments on an article."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass
class Comment:
    """A comment left by an authenticated user on one article.

    ``author_name`` is captured once when the comment is created and is not
    re-derived if the user's identity changes later.
    """

    article_id: str
    user_id: str
    content: str
    author_name: str
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def edit(self, content: str) -> None:
        self.content = content
        self.updated_at = datetime.now(timezone.utc)
