"""Domain entity for newsletter subscribers."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass
class NewsletterSubscriber:
    email: str
    is_active: bool = True
    id: str = field(default_factory=lambda: str(uuid4()))
    subscribed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
