"""Domain entities — pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass
class Article:
    """Core domain entity representing a blog article."""

    title: str
    category: str = "general"
    author: str = "Anonymous"
    excerpt: str | None = None
    content: str | None = None
    image_url: str | None = None
    read_time: str | None = None
    published: bool = False
    featured: bool = False
    featured_rank: int | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(self, **changes: object) -> None:
        """Apply field changes and refresh the updated_at timestamp."""
        for name, value in changes.items():
            if not hasattr(self, name) or name in ("id", "created_at", "updated_at"):
                raise AttributeError(f"Article has no editable field '{name}'")
            setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)

    def toggle_published(self) -> None:
        self.published = not self.published
        self.updated_at = datetime.now(timezone.utc)
