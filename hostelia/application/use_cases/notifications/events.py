"""Notification triggers raised by the hostel business workflows.

Each helper resolves its recipients and hands the notification to
:func:`create_notifications`. A failing notification must not break the
business action that raised it. Derived titles and messages are cut to the
stored length, and storage or validation errors are logged here and an empty
list is returned instead.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostelia.domain.entities import (
    MESSAGE_MAX_LENGTH,
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
    RELATED_ENTITY_MESS,
    RELATED_ENTITY_PROBLEM,
    ROLE_ADMIN,
    ROLE_STUDENT,
    ROLE_WARDEN,
    TITLE_MAX_LENGTH,
    Notification,
)
from hostelia.infrastructure.notifications import NotificationPublisher
from hostelia.infrastructure.repositories import UserRepository

from .create_notification import create_notifications

logger = logging.getLogger(__name__)

FEE_KIND_HOSTEL = "hostel"
FEE_KIND_MESS = "mess"

_FEE_SUBMITTED = {
    FEE_KIND_HOSTEL: (NOTIFICATION_TYPE_HOSTEL_FEE_SUBMITTED, "Hostel Fee Submitted", "hostel fee"),
    FEE_KIND_MESS: (NOTIFICATION_TYPE_MESS_FEE_SUBMITTED, "Mess Fee Submitted", "mess fee"),
}
_REMINDER_LABELS = {
    FEE_KIND_HOSTEL: "hostel fee",
    FEE_KIND_MESS: "mess fee",
    None: "hostel and mess fees",
}
_CONTACT_PREVIEW_LENGTH = 160


def notify_problem_created(
    session: Session,
    publisher: NotificationPublisher,
    *,
    problem_id: object,
    problem_title: str,
    hostel: str,
    student_name: str,
) -> list[Notification]:
    """Tell the wardens of ``hostel`` that a student reported a problem."""

    warden_ids = _active_ids(session, [ROLE_WARDEN], hostel=hostel)
    return _notify(
        session,
        publisher,
        warden_ids,
        type=NOTIFICATION_TYPE_PROBLEM_CREATED,
        title="New Problem Reported",
        message=f"{student_name} reported a problem: {problem_title}",
        related_entity_id=problem_id,
        related_entity_type=RELATED_ENTITY_PROBLEM,
    )


def notify_problem_status_updated(
    session: Session,
    publisher: NotificationPublisher,
    *,
    problem_id: object,
    problem_title: str,
    student_id: int,
    status: str,
) -> list[Notification]:
    """Tell the reporting student that their problem changed status."""

    return _notify(
        session,
        publisher,
        [student_id],
        type=NOTIFICATION_TYPE_PROBLEM_STATUS_UPDATED,
        title="Problem Status Updated",
        message=f"Your problem '{problem_title}' is now {status}.",
        related_entity_id=problem_id,
        related_entity_type=RELATED_ENTITY_PROBLEM,
    )


def notify_announcement_created(
    session: Session,
    publisher: NotificationPublisher,
    *,
    announcement_id: object,
    title: str,
) -> list[Notification]:
    """Broadcast a new announcement to every active student."""

    student_ids = _active_ids(session, [ROLE_STUDENT])
    return _notify(
        session,
        publisher,
        student_ids,
        type=NOTIFICATION_TYPE_ANNOUNCEMENT_CREATED,
        title="New Announcement",
        message=f"New announcement: {title}",
        related_entity_id=announcement_id,
        related_entity_type=RELATED_ENTITY_ANNOUNCEMENT,
    )


def notify_fee_submitted(
    session: Session,
    publisher: NotificationPublisher,
    *,
    fee_submission_id: object,
    fee_kind: str,
    student_name: str,
) -> list[Notification]:
    """Ask the admins to review a hostel or mess fee document."""

    try:
        notification_type, title, label = _FEE_SUBMITTED[fee_kind]
    except KeyError as exc:
        raise ValueError(f"Unknown fee kind: {fee_kind!r}") from exc

    admin_ids = _active_ids(session, [ROLE_ADMIN])
    return _notify(
        session,
        publisher,
        admin_ids,
        type=notification_type,
        title=title,
        message=f"{student_name} submitted {label} documents for review.",
        related_entity_id=fee_submission_id,
        related_entity_type=RELATED_ENTITY_FEE,
    )


def notify_fee_status_updated(
    session: Session,
    publisher: NotificationPublisher,
    *,
    fee_submission_id: object,
    student_id: int,
    hostel_fee_status: str | None = None,
    mess_fee_status: str | None = None,
) -> list[Notification]:
    """Tell a student that an admin reviewed their fee documents."""

    updates = []
    if hostel_fee_status is not None:
        updates.append(f"Hostel fee status: {hostel_fee_status}")
    if mess_fee_status is not None:
        updates.append(f"Mess fee status: {mess_fee_status}")
    message = " | ".join(updates) if updates else "Your fee status has been updated."

    return _notify(
        session,
        publisher,
        [student_id],
        type=NOTIFICATION_TYPE_FEE_STATUS_UPDATED,
        title="Fee Status Updated",
        message=message,
        related_entity_id=fee_submission_id,
        related_entity_type=RELATED_ENTITY_FEE,
    )


def notify_fee_reminder(
    session: Session,
    publisher: NotificationPublisher,
    *,
    fee_submission_id: object,
    student_id: int,
    fee_kind: str | None = None,
    notes: str | None = None,
) -> list[Notification]:
    """Remind a student to upload a fee document; ``fee_kind=None`` means both."""

    if fee_kind not in _REMINDER_LABELS:
        raise ValueError(f"Unknown fee kind: {fee_kind!r}")
    message = (
        f"You have been reminded to submit your {_REMINDER_LABELS[fee_kind]} "
        "payment document."
    )
    if notes:
        message = f"{message} Note: {notes.strip()}"

    return _notify(
        session,
        publisher,
        [student_id],
        type=NOTIFICATION_TYPE_FEE_SUBMISSION_REQUIRED,
        title="Fee Payment Reminder",
        message=message,
        related_entity_id=fee_submission_id,
        related_entity_type=RELATED_ENTITY_FEE,
    )


def notify_mess_feedback_submitted(
    session: Session,
    publisher: NotificationPublisher,
    *,
    feedback_id: object,
    student_name: str,
) -> list[Notification]:
    """Let wardens and admins know a student rated the mess."""

    staff_ids = _active_ids(session, [ROLE_WARDEN, ROLE_ADMIN])
    return _notify(
        session,
        publisher,
        staff_ids,
        type=NOTIFICATION_TYPE_MESS_FEEDBACK_SUBMITTED,
        title="Mess Feedback Submitted",
        message=f"{student_name} submitted feedback about the mess.",
        related_entity_id=feedback_id,
        related_entity_type=RELATED_ENTITY_MESS,
    )


def notify_mess_menu_updated(
    session: Session,
    publisher: NotificationPublisher,
    *,
    menu_id: object,
    day: str | None = None,
) -> list[Notification]:
    """Tell every active student that the mess menu changed."""

    student_ids = _active_ids(session, [ROLE_STUDENT])
    message = (
        f"The mess menu for {day} has been updated."
        if day
        else "The mess menu has been updated."
    )
    return _notify(
        session,
        publisher,
        student_ids,
        type=NOTIFICATION_TYPE_MESS_MENU_UPDATED,
        title="Mess Menu Updated",
        message=message,
        related_entity_id=menu_id,
        related_entity_type=RELATED_ENTITY_MESS,
    )


def notify_contact_message(
    session: Session,
    publisher: NotificationPublisher,
    *,
    name: str,
    email: str,
    message: str,
    subject: str | None = None,
) -> list[Notification]:
    """Forward a public contact form submission to the admins.

    Contact messages are not stored as entities, so a fresh identifier is
    generated for the weak reference.
    """

    preview = _truncate(message, _CONTACT_PREVIEW_LENGTH)

    admin_ids = _active_ids(session, [ROLE_ADMIN])
    return _notify(
        session,
        publisher,
        admin_ids,
        type=NOTIFICATION_TYPE_CONTACT_MESSAGE_RECEIVED,
        title=f"Contact: {subject}" if subject else "New Contact Message",
        message=f"{name} ({email}) says: {preview}",
        related_entity_id=uuid4().hex,
        related_entity_type=RELATED_ENTITY_CONTACT,
    )


def _truncate(text: str, limit: int) -> str:
    text = text.strip()
    if len(text) <= limit:
        return text
    return f"{text[: limit - 3]}..."


def _active_ids(
    session: Session, roles: Iterable[str], *, hostel: str | None = None
) -> list[int]:
    try:
        return UserRepository(session).list_active_ids_by_roles(roles, hostel=hostel)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("Failed to resolve notification recipients %s: %s", list(roles), exc)
        return []


def _notify(
    session: Session,
    publisher: NotificationPublisher,
    user_ids: Iterable[int],
    **notification_data: object,
) -> list[Notification]:
    notification_data["title"] = _truncate(str(notification_data["title"]), TITLE_MAX_LENGTH)
    notification_data["message"] = _truncate(
        str(notification_data["message"]), MESSAGE_MAX_LENGTH
    )
    try:
        notifications = create_notifications(
            session, publisher, user_ids, **notification_data  # type: ignore[arg-type]
        )
    except (SQLAlchemyError, ValueError) as exc:
        logger.error(
            "Failed to send %s notifications: %s", notification_data.get("type"), exc
        )
        return []
    if notifications:
        logger.info(
            "Notifications sent for %s (notified users: %s)",
            notification_data.get("type"),
            len(notifications),
        )
    return notifications


__all__ = [
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
