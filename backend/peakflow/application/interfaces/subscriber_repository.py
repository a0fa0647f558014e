"""Port for newsletter subscriber persistence."""

from abc import ABC, abstractmethod

from peakflow.domain.entities import NewsletterSubscriber


class SubscriberRepository(ABC):

    @abstractmethod
    async def get_by_id(self, subscriber_id: str) -> NewsletterSubscriber | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> NewsletterSubscriber | None:
        ...

    @abstractmethod
    async def list_all(self) -> list[NewsletterSubscriber]:
        """All subscribers, most recent first."""
        ...

    @abstractmethod
    async def create(self, subscriber: NewsletterSubscriber) -> NewsletterSubscriber:
        """Insert a subscriber. Raises DuplicateEntityError if the email exists."""
        ...

    @abstractmethod
    async def update(self, subscriber: NewsletterSubscriber) -> NewsletterSubscriber:
        ...

    @abstractmethod
    async def delete(self, subscriber_id: str) -> bool:
        ...
