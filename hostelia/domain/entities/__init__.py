"""Domain entities exposed by the application."""

from .notification import (
    MESSAGE_MAX_LENGTH,
    NOTIFICATION_TYPES,
    NOTIFICATION_TYPE_ANNOUNCEMENT_CREATED,
    NOTIFICATION_TYPE_CONTACT_MESSAGE_RECEIVED,
    NOTIFICATION_TYPE_FEE_STATUS_UPDATED,
    NOTIFICATION_TYPE_FEE_SUBMISSION_REQUIRED,
    NOTIFICATION_TYPE_HOSTEL_FEE_SUBMITTED,
    NOTIFICATION_TYPE_MESS_FEEDBACK_SUBMITTED,
    NOTIFICATION_TYPE_MESS_FEE_SUBMITTED,
    NOTIFICATION_TYPE_MESS_MENU_UPDATED,
    NOTIFICATION_TYPE_PROBLEM_CREATED,
    NOTIFICATION_TYPE_PROBLEM_STATUS_UPDATED,
    RELATED_ENTITY_ANNOUNCEMENT,
    RELATED_ENTITY_CONTACT,
    RELATED_ENTITY_FEE,
    RELATED_ENTITY_ID_MAX_LENGTH,
    RELATED_ENTITY_MESS,
    RELATED_ENTITY_PROBLEM,
    RELATED_ENTITY_TRANSIT,
    RELATED_ENTITY_TYPES,
    TITLE_MAX_LENGTH,
    Notification,
    NotificationPage,
    RelatedEntity,
)
from .user import ROLE_ADMIN, ROLE_STUDENT, ROLE_WARDEN, USER_ROLES, User

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
    "RELATED_ENTITY_ANNOUNCEMENT",
    "RELATED_ENTITY_CONTACT",
    "RELATED_ENTITY_FEE",
    "RELATED_ENTITY_ID_MAX_LENGTH",
    "RELATED_ENTITY_MESS",
    "RELATED_ENTITY_PROBLEM",
    "RELATED_ENTITY_TRANSIT",
    "RELATED_ENTITY_TYPES",
    "TITLE_MAX_LENGTH",
    "Notification",
    "NotificationPage",
    "RelatedEntity",
    "ROLE_ADMIN",
    "ROLE_STUDENT",
    "ROLE_WARDEN",
    "USER_ROLES",
    "User",
]
