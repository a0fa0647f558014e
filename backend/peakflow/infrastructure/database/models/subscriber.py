"""SQLAlchemy ORM model for newsletter subscribers."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from peakflow.infrastructure.database.base import Base


class NewsletterSubscriberModel(Base):
    """ORM model — maps to the 'newsletter_subscribers' table."""

    __tablename__ = "newsletter_subscribers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    subscribed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<NewsletterSubscriberModel(email='{self.email}', active={self.is_active})>"
