"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from hostelia.domain.entities import Notification, NotificationPage


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NotificationRead(_CamelModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: int
    type: str
    title: str
    message: str
    related_entity_id: str
    related_entity_type: str
    read: bool
    read_at: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRead":
        return cls(
            id=notification.id or 0,
            user_id=notification.user_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            related_entity_id=notification.related_entity.id,
            related_entity_type=notification.related_entity.type,
            read=notification.read,
            read_at=notification.read_at,
            created_at=notification.created_at,
            updated_at=notification.updated_at,
        )


class NotificationListResponse(_CamelModel):
    """One page of notifications for the authenticated user."""

    notifications: list[NotificationRead] = Field(default_factory=list)
    total_count: int
    has_more: bool

    @classmethod
    def from_page(cls, page: NotificationPage) -> "NotificationListResponse":
        return cls(
            notifications=[NotificationRead.from_entity(n) for n in page.notifications],
            total_count=page.total_count,
            has_more=page.has_more,
        )


class NotificationCountResponse(BaseModel):
    """Number of notifications affected or pending."""

    count: int = Field(..., ge=0)


__all__ = ["NotificationCountResponse", "NotificationListResponse", "NotificationRead"]
