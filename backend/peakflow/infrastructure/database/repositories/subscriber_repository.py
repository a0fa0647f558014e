"""Concrete repository implementation for newsletter subscribers."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from peakflow.application.interfaces import SubscriberRepository
from peakflow.domain.entities import ChangeType, NewsletterSubscriber
from peakflow.domain.exceptions import DuplicateEntityError
from peakflow.infrastructure.database.change_tracking import record_change, take_pending_changes
from peakflow.infrastructure.database.models import NewsletterSubscriberModel


class SQLAlchemySubscriberRepository(SubscriberRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: NewsletterSubscriberModel) -> NewsletterSubscriber:
        return NewsletterSubscriber(
            id=model.id,
            email=model.email,
            is_active=model.is_active,
            subscribed_at=model.subscribed_at,
        )

    async def get_by_id(self, subscriber_id: str) -> NewsletterSubscriber | None:
        result = await self._session.get(NewsletterSubscriberModel, subscriber_id)
        return self._to_entity(result) if result else None

    async def get_by_email(self, email: str) -> NewsletterSubscriber | None:
        stmt = select(NewsletterSubscriberModel).where(NewsletterSubscriberModel.email == email)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_all(self) -> list[NewsletterSubscriber]:
        stmt = select(NewsletterSubscriberModel).order_by(NewsletterSubscriberModel.subscribed_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, subscriber: NewsletterSubscriber) -> NewsletterSubscriber:
        model = NewsletterSubscriberModel(
            id=subscriber.id,
            email=subscriber.email,
            is_active=subscriber.is_active,
            subscribed_at=subscriber.subscribed_at,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same address.
            await self._session.rollback()
            take_pending_changes(self._session)
            raise DuplicateEntityError("NewsletterSubscriber", "email", subscriber.email)
        record_change(self._session, model, ChangeType.INSERT)
        return self._to_entity(model)

    async def update(self, subscriber: NewsletterSubscriber) -> NewsletterSubscriber:
        model = await self._session.get(NewsletterSubscriberModel, subscriber.id)
        if model is None:
            raise ValueError(f"NewsletterSubscriber {subscriber.id} not found in database")
        model.is_active = subscriber.is_active
        await self._session.flush()
        record_change(self._session, model, ChangeType.UPDATE)
        return self._to_entity(model)

    async def delete(self, subscriber_id: str) -> bool:
        model = await self._session.get(NewsletterSubscriberModel, subscriber_id)
        if model is None:
            return False
        record_change(self._session, model, ChangeType.DELETE)
        await self._session.delete(model)
        await self._session.flush()
        return True
