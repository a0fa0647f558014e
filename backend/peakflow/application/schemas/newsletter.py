"""Pydantic DTOs for newsletter signup and subscriber management."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, field_validator


class SubscribeRequest(BaseModel):
    """Signup form payload — email is trimmed before validation."""

    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class SubscribeResponse(BaseModel):
    status: Literal["subscribed", "already_subscribed"]
    title: str
    message: str


class SubscriberResponse(BaseModel):
    id: str
    email: str
    is_active: bool
    subscribed_at: datetime

    model_config = {"from_attributes": True}
