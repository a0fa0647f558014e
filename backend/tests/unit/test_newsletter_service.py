"""Unit tests for newsletter signup, subscriber admin, and CSV export."""

from datetime import date, datetime, timezone

import pytest

from peakflow.application.services import NewsletterService, export_subscribers_csv
from peakflow.domain.entities import NewsletterSubscriber
from peakflow.domain.exceptions import EntityNotFoundError


@pytest.fixture
def service(subscriber_repo) -> NewsletterService:
    return NewsletterService(subscriber_repo)


@pytest.mark.asyncio
async def test_subscribe_normalises_email(service, subscriber_repo):
    outcome = await service.subscribe("  Reader@Example.COM ")

    assert outcome.status == "subscribed"
    assert outcome.title == "Welcome aboard!"
    [subscriber] = await subscriber_repo.list_all()
    assert subscriber.email == "reader@example.com"
    assert subscriber.is_active is True


@pytest.mark.asyncio
async def test_repeat_signup_is_soft_success(service, subscriber_repo):
    await service.subscribe("reader@example.com")

    outcome = await service.subscribe("READER@example.com")

    assert outcome.status == "already_subscribed"
    assert outcome.title == "Already subscribed"
    assert len(await subscriber_repo.list_all()) == 1


@pytest.mark.asyncio
async def test_toggle_active_flips_flag(service, subscriber_repo):
    subscriber = subscriber_repo.add(email="a@example.com")

    toggled = await service.toggle_active(subscriber.id)

    assert toggled.is_active is False


@pytest.mark.asyncio
async def test_delete_missing_subscriber(service):
    with pytest.raises(EntityNotFoundError):
        await service.delete_subscriber("missing")


@pytest.mark.asyncio
async def test_export_with_no_subscribers_is_not_found(service):
    with pytest.raises(EntityNotFoundError):
        await service.export_csv()


def test_export_subscribers_csv_format():
    subscribed_at = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
    subscribers = [
        NewsletterSubscriber(email="a@example.com", subscribed_at=subscribed_at),
        NewsletterSubscriber(email="b@example.com", is_active=False, subscribed_at=subscribed_at),
    ]

    export = export_subscribers_csv(subscribers, today=date(2024, 3, 15))

    assert export.filename == "newsletter-subscribers-2024-03-15.csv"
    assert export.content.splitlines() == [
        "Email,Status,Subscribed At",
        "a@example.com,Active,2024-03-01T09:30:00+00:00",
        "b@example.com,Inactive,2024-03-01T09:30:00+00:00",
    ]
