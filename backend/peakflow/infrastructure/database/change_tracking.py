"""Pending change events carried on a DB session until it commits."""

from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from peakflow.domain.entities import ChangeEvent, ChangeType
from peakflow.infrastructure.database.base import Base

_PENDING_KEY = "peakflow.pending_changes"


def to_record(model: Base) -> dict[str, Any]:
    """Column values of a model as JSON-compatible primitives."""
    record: dict[str, Any] = {}
    for column in model.__table__.columns:
        value = getattr(model, column.key)
        if isinstance(value, datetime):
            value = value.isoformat()
        elif isinstance(value, Enum):
            value = value.value
        record[column.key] = value
    return record


def record_change(session: AsyncSession, model: Base, change_type: ChangeType) -> None:
    """Queue a change event; it is only published once the session commits."""
    event = ChangeEvent(
        table=model.__tablename__,
        event=change_type,
        record=to_record(model),
    )
    session.info.setdefault(_PENDING_KEY, []).append(event)


def take_pending_changes(session: AsyncSession) -> list[ChangeEvent]:
    """Remove and return the queued events for this session."""
    return session.info.pop(_PENDING_KEY, [])
