"""Display mapping — the pure transform from an Article row to what views render."""

from dataclasses import dataclass
from datetime import datetime

from peakflow.domain.entities import Article

DISPLAY_DEFAULTS: dict[str, str] = {
    "image": "https://images.unsplash.com/photo-1499750310107-5fef28a66643?w=1920&q=80",
    "read_time": "5 min read",
}

CATEGORY_COLORS: dict[str, str] = {
    "wellness": "hsl(280, 30%, 55%)",
    "travel": "hsl(195, 50%, 50%)",
    "creativity": "hsl(330, 40%, 55%)",
    "growth": "hsl(50, 45%, 50%)",
    "lifestyle": "hsl(140, 20%, 50%)",
    "general": "hsl(0, 0%, 50%)",
}


@dataclass(frozen=True)
class ArticleDisplay:
    id: str
    title: str
    category: str
    date: str
    image: str
    excerpt: str | None
    content: str | None
    author: str
    read_time: str
    category_color: str

    def to_dict(self) -> dict[str, str | None]:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "date": self.date,
            "image": self.image,
            "excerpt": self.excerpt,
            "content": self.content,
            "author": self.author,
            "read_time": self.read_time,
            "category_color": self.category_color,
        }


def format_date(value: datetime) -> str:
    """en-US short date, e.g. ``Jan 5, 2024``."""
    return f"{value:%b} {value.day}, {value.year}"


def category_color(category: str | None) -> str:
    """Tag colour for a category label; unknown labels use the general colour."""
    key = (category or "general").strip().lower()
    return CATEGORY_COLORS.get(key, CATEGORY_COLORS["general"])


def to_display(article: Article) -> ArticleDisplay:
    return ArticleDisplay(
        id=article.id,
        title=article.title,
        category=article.category,
        date=format_date(article.created_at),
        image=article.image_url or DISPLAY_DEFAULTS["image"],
        excerpt=article.excerpt,
        content=article.content,
        author=article.author,
        read_time=article.read_time or DISPLAY_DEFAULTS["read_time"],
        category_color=category_color(article.category),
    )
