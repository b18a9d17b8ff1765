"""Use case for counting unread notifications."""

from sqlalchemy.orm import Session

from hostelia.infrastructure.repositories import NotificationRepository


def count_unread_notifications(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).count_unread(user_id)
