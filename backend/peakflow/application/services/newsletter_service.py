"""Application service for newsletter signup and subscriber management."""

import csv
import io
import logging
from dataclasses import dataclass
from datetime import date

from peakflow.application.interfaces import SubscriberRepository
from peakflow.domain.entities import NewsletterSubscriber
from peakflow.domain.exceptions import DuplicateEntityError, EntityNotFoundError

logger = logging.getLogger(__name__)

CSV_HEADERS = ("Email", "Status", "Subscribed At")


@dataclass(frozen=True)
class SubscribeOutcome:
    status: str
    title: str
    message: str


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str


def export_subscribers_csv(subscribers: list[NewsletterSubscriber], today: date | None = None) -> CsvExport:
    """Build the subscriber CSV in memory. No store round trip."""
    today = today or date.today()
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for subscriber in subscribers:
        writer.writerow([
            subscriber.email,
            "Active" if subscriber.is_active else "Inactive",
            subscriber.subscribed_at.isoformat(),
        ])
    return CsvExport(
        filename=f"newsletter-subscribers-{today.isoformat()}.csv",
        content=buffer.getvalue(),
    )


class NewsletterService:

    def __init__(self, repository: SubscriberRepository):
        self._repository = repository

    async def subscribe(self, email: str) -> SubscribeOutcome:
        """Add an email to the list. A repeat signup is a soft success."""
        email = email.strip().lower()
        try:
            if await self._repository.get_by_email(email) is not None:
                raise DuplicateEntityError("NewsletterSubscriber", "email", email)
            await self._repository.create(NewsletterSubscriber(email=email))
        except DuplicateEntityError:
            logger.info("Repeat newsletter signup for %s", email)
            return SubscribeOutcome(
                status="already_subscribed",
                title="Already subscribed",
                message="This email is already on our mailing list.",
            )
        logger.info("New newsletter subscriber %s", email)
        return SubscribeOutcome(
            status="subscribed",
            title="Welcome aboard!",
            message="You've successfully subscribed to our newsletter.",
        )

    async def list_subscribers(self) -> list[NewsletterSubscriber]:
        return await self._repository.list_all()

    async def toggle_active(self, subscriber_id: str) -> NewsletterSubscriber:
        subscriber = await self._repository.get_by_id(subscriber_id)
        if subscriber is None:
            raise EntityNotFoundError("NewsletterSubscriber", subscriber_id)
        subscriber.is_active = not subscriber.is_active
        return await self._repository.update(subscriber)

    async def delete_subscriber(self, subscriber_id: str) -> bool:
        if not await self._repository.delete(subscriber_id):
            raise EntityNotFoundError("NewsletterSubscriber", subscriber_id)
        return True

    async def export_csv(self, today: date | None = None) -> CsvExport:
        subscribers = await self._repository.list_all()
        if not subscribers:
            raise EntityNotFoundError("NewsletterSubscriber", "*")
        return export_subscribers_csv(subscribers, today=today)
