"""Single entry point through which notifications are stored and pushed."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostelia.domain.entities import (
    MESSAGE_MAX_LENGTH,
    NOTIFICATION_TYPES,
    RELATED_ENTITY_ID_MAX_LENGTH,
    RELATED_ENTITY_TYPES,
    TITLE_MAX_LENGTH,
    Notification,
    RelatedEntity,
)
from hostelia.infrastructure.notifications import NotificationPublisher
from hostelia.infrastructure.repositories import NotificationRepository
from hostelia.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def create_notification(
    session: Session,
    publisher: NotificationPublisher,
    *,
    user_id: int,
    type: str,
    title: str,
    message: str,
    related_entity_id: object,
    related_entity_type: str,
) -> Notification:
    """Persist one notification for ``user_id`` and try to push it live.

    Storage errors propagate after the session is rolled back. Live delivery
    is best effort and never fails this call.
    """

    draft = _build_notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        related_entity_id=related_entity_id,
        related_entity_type=related_entity_type,
    )
    try:
        saved = NotificationRepository(session).create(draft)
    except SQLAlchemyError:
        session.rollback()
        logger.exception(
            "Failed to create notification of type %s for user %s", type, user_id
        )
        raise

    logger.info(
        "Notification %s created for user %s (type=%s)", saved.id, saved.user_id, saved.type
    )
    publisher.dispatch(saved)
    return saved


def create_notifications(
    session: Session,
    publisher: NotificationPublisher,
    user_ids: Iterable[int],
    *,
    type: str,
    title: str,
    message: str,
    related_entity_id: object,
    related_entity_type: str,
) -> list[Notification]:
    """Persist one notification per recipient in a single insert, then push each.

    Duplicate ids are collapsed keeping their first position. Records stay
    stored even when some or all live deliveries fail.
    """

    recipients = list(dict.fromkeys(uid for uid in user_ids if uid is not None))
    if not recipients:
        return []

    now = now_in_app_timezone()
    drafts = [
        _build_notification(
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            related_entity_id=related_entity_id,
            related_entity_type=related_entity_type,
            created_at=now,
        )
        for user_id in recipients
    ]
    try:
        saved = NotificationRepository(session).create_many(drafts)
    except SQLAlchemyError:
        session.rollback()
        logger.exception(
            "Failed to create bulk notifications of type %s for users %s", type, recipients
        )
        raise

    logger.info("Bulk notifications created: %s of type %s", len(saved), type)
    publisher.dispatch_many(saved)
    return saved


def _build_notification(
    *,
    user_id: int,
    type: str,
    title: str,
    message: str,
    related_entity_id: object,
    related_entity_type: str,
    created_at: datetime | None = None,
) -> Notification:
    if type not in NOTIFICATION_TYPES:
        raise ValueError(f"Unknown notification type: {type!r}")
    if related_entity_type not in RELATED_ENTITY_TYPES:
        raise ValueError(f"Unknown related entity type: {related_entity_type!r}")

    title = (title or "").strip()
    message = (message or "").strip()
    if not title:
        raise ValueError("Notification title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValueError(f"Notification title exceeds {TITLE_MAX_LENGTH} characters")
    if not message:
        raise ValueError("Notification message is required")
    if len(message) > MESSAGE_MAX_LENGTH:
        raise ValueError(f"Notification message exceeds {MESSAGE_MAX_LENGTH} characters")

    entity_id = "" if related_entity_id is None else str(related_entity_id).strip()
    if not entity_id:
        raise ValueError("Related entity id is required")
    if len(entity_id) > RELATED_ENTITY_ID_MAX_LENGTH:
        raise ValueError(
            f"Related entity id exceeds {RELATED_ENTITY_ID_MAX_LENGTH} characters"
        )

    return Notification(
        id=None,
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        related_entity=RelatedEntity(type=related_entity_type, id=entity_id),
        created_at=created_at,
    )


__all__ = ["create_notification", "create_notifications"]
