"""Public helpers for storing, querying and emitting notifications."""

from .create_notification import create_notification, create_notifications
from .events import (
    FEE_KIND_HOSTEL,
    FEE_KIND_MESS,
    notify_announcement_created,
    notify_contact_message,
    notify_fee_reminder,
    notify_fee_status_updated,
    notify_fee_submitted,
    notify_mess_feedback_submitted,
    notify_mess_menu_updated,
    notify_problem_created,
    notify_problem_status_updated,
)
from .list_notifications import list_notifications, normalize_pagination
from .mark_read import mark_all_notifications_read, mark_notification_read
from .unread_count import count_unread_notifications

__all__ = [
    "create_notification",
    "create_notifications",
    "list_notifications",
    "normalize_pagination",
    "mark_notification_read",
    "mark_all_notifications_read",
    "count_unread_notifications",
    "FEE_KIND_HOSTEL",
    "FEE_KIND_MESS",
    "notify_announcement_created",
    "notify_contact_message",
    "notify_fee_reminder",
    "notify_fee_status_updated",
    "notify_fee_submitted",
    "notify_mess_feedback_submitted",
    "notify_mess_menu_updated",
    "notify_problem_created",
    "notify_problem_status_updated",
]
