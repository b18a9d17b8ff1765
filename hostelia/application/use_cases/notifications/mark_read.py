"""Use cases that clear unread state."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostelia.domain.entities import Notification
from hostelia.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def mark_notification_read(
    session: Session, *, notification_id: int, user_id: int
) -> Notification | None:
    """Mark one notification owned by ``user_id`` as read.

    ``None`` is returned both for unknown ids and for notifications owned by
    another user, so callers cannot discover foreign ids.
    """

    try:
        notification = NotificationRepository(session).mark_as_read(
            notification_id, user_id=user_id
        )
    except SQLAlchemyError:
        session.rollback()
        raise
    if notification is not None:
        logger.info("Notification %s marked as read by user %s", notification_id, user_id)
    return notification


def mark_all_notifications_read(session: Session, *, user_id: int) -> int:
    """Mark every unread notification of ``user_id``; return how many changed."""

    try:
        count = NotificationRepository(session).mark_all_as_read(user_id)
    except SQLAlchemyError:
        session.rollback()
        raise
    logger.info("All notifications marked as read for user %s (count=%s)", user_id, count)
    return count


__all__ = ["mark_all_notifications_read", "mark_notification_read"]
