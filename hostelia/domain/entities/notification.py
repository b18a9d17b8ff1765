"""Domain entities describing user notifications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Final

NOTIFICATION_TYPE_PROBLEM_CREATED: Final[str] = "problem_created"
NOTIFICATION_TYPE_PROBLEM_STATUS_UPDATED: Final[str] = "problem_status_updated"
NOTIFICATION_TYPE_ANNOUNCEMENT_CREATED: Final[str] = "announcement_created"
NOTIFICATION_TYPE_MESS_FEEDBACK_SUBMITTED: Final[str] = "mess_feedback_submitted"
NOTIFICATION_TYPE_HOSTEL_FEE_SUBMITTED: Final[str] = "hostel_fee_submitted"
NOTIFICATION_TYPE_MESS_FEE_SUBMITTED: Final[str] = "mess_fee_submitted"
NOTIFICATION_TYPE_FEE_STATUS_UPDATED: Final[str] = "fee_status_updated"
NOTIFICATION_TYPE_MESS_MENU_UPDATED: Final[str] = "mess_menu_updated"
NOTIFICATION_TYPE_FEE_SUBMISSION_REQUIRED: Final[str] = "fee_submission_required"
NOTIFICATION_TYPE_CONTACT_MESSAGE_RECEIVED: Final[str] = "contact_message_received"

NOTIFICATION_TYPES: Final[frozenset[str]] = frozenset(
    {
        NOTIFICATION_TYPE_PROBLEM_CREATED,
        NOTIFICATION_TYPE_PROBLEM_STATUS_UPDATED,
        NOTIFICATION_TYPE_ANNOUNCEMENT_CREATED,
        NOTIFICATION_TYPE_MESS_FEEDBACK_SUBMITTED,
        NOTIFICATION_TYPE_HOSTEL_FEE_SUBMITTED,
        NOTIFICATION_TYPE_MESS_FEE_SUBMITTED,
        NOTIFICATION_TYPE_FEE_STATUS_UPDATED,
        NOTIFICATION_TYPE_MESS_MENU_UPDATED,
        NOTIFICATION_TYPE_FEE_SUBMISSION_REQUIRED,
        NOTIFICATION_TYPE_CONTACT_MESSAGE_RECEIVED,
    }
)

RELATED_ENTITY_PROBLEM: Final[str] = "problem"
RELATED_ENTITY_ANNOUNCEMENT: Final[str] = "announcement"
RELATED_ENTITY_FEE: Final[str] = "fee"
RELATED_ENTITY_TRANSIT: Final[str] = "transit"
RELATED_ENTITY_MESS: Final[str] = "mess"
RELATED_ENTITY_CONTACT: Final[str] = "contact"

RELATED_ENTITY_TYPES: Final[frozenset[str]] = frozenset(
    {
        RELATED_ENTITY_PROBLEM,
        RELATED_ENTITY_ANNOUNCEMENT,
        RELATED_ENTITY_FEE,
        RELATED_ENTITY_TRANSIT,
        RELATED_ENTITY_MESS,
        RELATED_ENTITY_CONTACT,
    }
)

TITLE_MAX_LENGTH: Final[int] = 200
MESSAGE_MAX_LENGTH: Final[int] = 1000
RELATED_ENTITY_ID_MAX_LENGTH: Final[int] = 64


@dataclass(frozen=True)
class RelatedEntity:
    """Weak reference to the domain object that caused a notification.

    Only the identifier and its kind are kept; deleting the referenced object
    never affects the notification.
    """

    type: str
    id: str


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    user_id: int
    type: str
    title: str
    message: str
    related_entity: RelatedEntity
    read: bool = False
    read_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class NotificationPage:
    """One page of notifications plus the information needed to paginate."""

    notifications: list[Notification] = field(default_factory=list)
    total_count: int = 0
    has_more: bool = False


__all__ = [
    "MESSAGE_MAX_LENGTH",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_ANNOUNCEMENT_CREATED",
    "NOTIFICATION_TYPE_CONTACT_MESSAGE_RECEIVED",
    "NOTIFICATION_TYPE_FEE_STATUS_UPDATED",
    "NOTIFICATION_TYPE_FEE_SUBMISSION_REQUIRED",
    "NOTIFICATION_TYPE_HOSTEL_FEE_SUBMITTED",
    "NOTIFICATION_TYPE_MESS_FEEDBACK_SUBMITTED",
    "NOTIFICATION_TYPE_MESS_FEE_SUBMITTED",
    "NOTIFICATION_TYPE_MESS_MENU_UPDATED",
    "NOTIFICATION_TYPE_PROBLEM_CREATED",
    "NOTIFICATION_TYPE_PROBLEM_STATUS_UPDATED",
    "Notification",
    "NotificationPage",
    "RELATED_ENTITY_ANNOUNCEMENT",
    "RELATED_ENTITY_CONTACT",
    "RELATED_ENTITY_FEE",
    "RELATED_ENTITY_ID_MAX_LENGTH",
    "RELATED_ENTITY_MESS",
    "RELATED_ENTITY_PROBLEM",
    "RELATED_ENTITY_TRANSIT",
    "RELATED_ENTITY_TYPES",
    "RelatedEntity",
    "TITLE_MAX_LENGTH",
]
